import logging

from flake_ci.clients.command_runner import CommandRunner

logger = logging.getLogger(__name__)

CACHIX_PUSH_FLAKE = "github:juspay/cachix-push"


class CachixClient:
    def __init__(self, runner: CommandRunner | None = None):
        self.runner: CommandRunner = runner or CommandRunner()

    def push(self, subflake: str, prefix: str, cache: str, names: str | None, results: str) -> None:
        cmd = [
            "nix", "run", CACHIX_PUSH_FLAKE, "--",
            "--subflake", subflake,
            "--prefix", prefix,
            "--cache", cache,
        ]
        if names is not None:
            cmd += ["--names", names]
        else:
            logger.info("No names allow-list given, pushing and pinning all derivations")
        self.runner.run(cmd, input=results)
