from flake_ci.clients.command_runner import CommandRunner


class AwsClient:
    def __init__(self, runner: CommandRunner | None = None):
        self.runner: CommandRunner = runner or CommandRunner()

    def ecr_login_password(self, region: str) -> str:
        return self.runner.run(
            ["aws", "ecr", "get-login-password", "--region", region],
            capture_output=True,
            secret_output=True,
        ).strip()
