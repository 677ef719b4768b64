from flake_ci.clients import OmnixClient
from flake_ci.errors import ConfigurationError
from flake_ci.models import BuildResultManifest, RunConfiguration
from flake_ci.services.stage import Stage


class BuildStage(Stage):
    name = "Build all flake outputs ❄️"

    def __init__(self, omnix: OmnixClient | None = None, dry_run: bool = False):
        super().__init__(dry_run)
        self.omnix: OmnixClient = omnix or OmnixClient()

    def build(self, config: RunConfiguration) -> BuildResultManifest:
        with self.stage():
            if not config.system:
                raise ConfigurationError("system")

            results_file = f"{config.result_file_prefix}-{config.system}.json"
            self.omnix.ci_run(config.system, results_file, config.nix_args)
            return BuildResultManifest(path=results_file)
