from flake_ci.clients import CachixClient
from flake_ci.errors import ConfigurationError
from flake_ci.models import BuildResultManifest, RunConfiguration
from flake_ci.services.stage import Stage


class CachePushStage(Stage):
    name = "Push to Cachix"

    def __init__(self, cachix: CachixClient | None = None, dry_run: bool = False):
        super().__init__(dry_run)
        self.cachix: CachixClient = cachix or CachixClient()

    def push(self, config: RunConfiguration, manifest: BuildResultManifest) -> None:
        with self.stage():
            cache_config = config.cachix
            if cache_config is None:
                raise ConfigurationError("cachix")
            if not cache_config.prefix:
                raise ConfigurationError("prefix")
            if not cache_config.cache:
                raise ConfigurationError("cache")

            if self.dry_run:
                results = ""
            else:
                results = manifest.read()
            self.cachix.push(
                subflake=config.subflake,
                prefix=cache_config.prefix,
                cache=cache_config.cache,
                names=cache_config.names_argument(),
                results=results,
            )
