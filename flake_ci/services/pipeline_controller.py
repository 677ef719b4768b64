import logging
from typing import Any, Mapping

from typing_extensions import override

from flake_ci.clients import CachixClient, CommandRunner, NixClient, OmnixClient
from flake_ci.models import PipelineResult, PipelineStatus, RunConfiguration
from flake_ci.repositories import ArtifactRepository
from flake_ci.services.build_stage import BuildStage
from flake_ci.services.cache_push_stage import CachePushStage
from flake_ci.services.config_merger import DEFAULTS, ConfigMerger
from flake_ci.services.container_build_stage import ContainerBuildStage
from flake_ci.services.registry_push_stage import RegistryPushStage
from flake_ci.services.service import Service
from flake_ci.utils.logging import setup_logger
from flake_ci.utils.settings import CONTAINER_BUILD_SYSTEM, Settings


class PipelineController(Service):
    """Build, then optionally push to Cachix, then optionally ship a docker image.

    The controller is the only writer of the pipeline status: any stage error
    turns the result into FAILURE before it is re-raised.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        runner: CommandRunner | None = None,
        artifacts: ArtifactRepository | None = None,
        dry_run: bool = False,
    ):
        self.settings: Settings = settings or Settings.from_env()
        self.runner: CommandRunner = runner or CommandRunner(dry_run=dry_run)
        self.dry_run: bool = self.runner.dry_run
        self.artifacts: ArtifactRepository = artifacts or ArtifactRepository(
            self.settings.stash_dir, self.settings.stash_ttl_hours
        )
        self.logger: logging.Logger = setup_logger("PipelineController")

        self.build_stage: BuildStage = BuildStage(OmnixClient(self.runner), self.dry_run)
        self.cache_push_stage: CachePushStage = CachePushStage(CachixClient(self.runner), self.dry_run)
        self.container_build_stage: ContainerBuildStage = ContainerBuildStage(
            NixClient(self.runner), self.artifacts, self.dry_run
        )
        self.registry_push_stage: RegistryPushStage = RegistryPushStage(
            self.artifacts, self.settings.agent_workspace_root, runner=self.runner, dry_run=self.dry_run
        )
        self.result: PipelineResult = PipelineResult()

    @override
    def run(self, params: Mapping[str, Any] | RunConfiguration) -> PipelineResult:
        self.result = PipelineResult()
        system = None
        try:
            if isinstance(params, RunConfiguration):
                config = params
            else:
                config = ConfigMerger.merge(DEFAULTS, params)
            system = config.system

            self.result.manifest = self.build_stage.build(config)
            self.result.stages.append("build")

            if config.cachix:
                self.cache_push_stage.push(config, self.result.manifest)
                self.result.stages.append("cachix")

            if config.system == CONTAINER_BUILD_SYSTEM and config.docker:
                self.result.archive = self.container_build_stage.build_container(config)
                self.result.stages.append("docker-build")
                self.registry_push_stage.push_all(config.docker, self.result.archive)
                self.result.stages.append("docker-push")
        except Exception as e:
            self.result.status = PipelineStatus.FAILURE
            self.result.error = e
            self.logger.error(f"Pipeline failed for system {system}: {e}")
            raise

        self.logger.info(f"Pipeline for system {config.system} finished: {self.result.status.value}")
        return self.result


def run(params: Mapping[str, Any], dry_run: bool = False) -> PipelineResult:
    return PipelineController(dry_run=dry_run).run(params)
