from flake_ci.clients.command_runner import CommandRunner


class NixClient:
    def __init__(self, runner: CommandRunner | None = None):
        self.runner: CommandRunner = runner or CommandRunner()

    def copy_to_docker_archive(self, flake_output: str, tarball_name: str) -> None:
        # nix2container's copyTo refuses to overwrite an existing docker-archive
        self.runner.run(["nix", "run", f".#{flake_output}.copyTo", f"docker-archive:{tarball_name}"])
