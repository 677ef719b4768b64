import logging

from flake_ci.clients.command_runner import CommandRunner
from flake_ci.errors import ToolExecutionError

logger = logging.getLogger(__name__)

DRY_RUN_IMAGE_ID = "dry-run-image"


class DockerClient:
    def __init__(self, runner: CommandRunner | None = None):
        self.runner: CommandRunner = runner or CommandRunner()

    def load(self, archive_path: str) -> str:
        """Load an image archive and return the loaded image ID or reference."""
        cmd = ["docker", "load"]
        output = self.runner.run(cmd, stdin_path=archive_path, capture_output=True)
        if self.runner.dry_run:
            return DRY_RUN_IMAGE_ID
        lines = [line for line in output.splitlines() if line.strip()]
        if not lines:
            raise ToolExecutionError(cmd, None, "docker load did not report a loaded image")
        # "Loaded image: name:tag" or "Loaded image ID: sha256:..."
        image_id = lines[-1].split()[-1]
        logger.info(f"Loaded docker image {image_id}")
        return image_id

    def login(self, registry: str, password: str) -> None:
        self.runner.run(
            ["docker", "login", "--username", "AWS", "--password-stdin", registry],
            input=password,
        )

    def tag(self, image_id: str, reference: str) -> None:
        self.runner.run(["docker", "tag", image_id, reference])

    def push(self, reference: str) -> None:
        self.runner.run(["docker", "push", reference])
