import os
import shlex
import subprocess
import logging

from flake_ci.errors import ToolExecutionError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands as argv lists, never through a shell.

    Every non-zero exit is raised as ToolExecutionError; nothing is retried.
    In dry-run mode commands are only logged and an empty output is returned.
    """

    def __init__(self, cwd: str | None = None, dry_run: bool = False):
        self.cwd: str | None = cwd
        self.dry_run: bool = dry_run

    def in_directory(self, cwd: str) -> "CommandRunner":
        return CommandRunner(cwd=cwd, dry_run=self.dry_run)

    def run(
        self,
        cmd: list[str],
        input: str | None = None,
        stdin_path: str | None = None,
        capture_output: bool = False,
        secret_output: bool = False,
    ) -> str:
        printable = shlex.join(cmd)
        if self.dry_run:
            logger.info(f"Dry run mode. Skipping: {printable}")
            return ""

        logger.info(f"Running: {printable}")
        if stdin_path is not None:
            with open(self._resolve(stdin_path), "rb") as stdin:
                result = subprocess.run(
                    cmd, stdin=stdin, capture_output=capture_output, check=False, cwd=self.cwd, env=os.environ
                )
            stdout = result.stdout.decode() if capture_output and result.stdout else ""
            stderr = result.stderr.decode() if capture_output and result.stderr else None
        else:
            result = subprocess.run(
                cmd, input=input, capture_output=capture_output, text=True, check=False, cwd=self.cwd, env=os.environ
            )
            stdout = (result.stdout or "") if capture_output else ""
            stderr = result.stderr if capture_output else None

        if result.returncode != 0:
            logger.error(f"{cmd[0]} failed with code {result.returncode}")
            raise ToolExecutionError(cmd, result.returncode, stderr)
        if capture_output and not secret_output:
            logger.debug(f"{cmd[0]} output: {stdout.strip()}")
        return stdout

    def _resolve(self, path: str) -> str:
        if self.cwd and not os.path.isabs(path):
            return os.path.join(self.cwd, path)
        return path
