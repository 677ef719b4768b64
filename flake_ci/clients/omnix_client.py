from flake_ci.clients.command_runner import CommandRunner


class OmnixClient:
    def __init__(self, runner: CommandRunner | None = None):
        self.runner: CommandRunner = runner or CommandRunner()

    def ci_run(self, system: str, results_file: str, nix_args: list[str] | None = None) -> None:
        cmd = ["om", "ci", "run", "--systems", system, f"--results={results_file}"]
        # everything after `--` is handed to nix untouched
        if nix_args:
            cmd += ["--", *nix_args]
        self.runner.run(cmd)
