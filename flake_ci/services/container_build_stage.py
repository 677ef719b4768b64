import os
from datetime import datetime

from flake_ci.clients import NixClient
from flake_ci.errors import ConfigurationError
from flake_ci.models import ContainerArchiveHandle, ContainerConfiguration, RunConfiguration
from flake_ci.repositories import ArtifactRepository
from flake_ci.services.stage import Stage


def validate_container_configuration(docker: ContainerConfiguration | None) -> ContainerConfiguration:
    if docker is None:
        raise ConfigurationError("docker")
    if not docker.flake_output:
        raise ConfigurationError("flakeOutput")
    if not docker.image_name:
        raise ConfigurationError("imageName")
    if not docker.image_tag:
        raise ConfigurationError("imageTag")
    if not docker.aws_accounts:
        raise ConfigurationError("awsAccounts")
    for i, target in enumerate(docker.aws_accounts):
        for field, value in (("ns", target.ns), ("awsAccountId", target.aws_account_id), ("region", target.region)):
            if not value:
                raise ConfigurationError(f"awsAccounts[{i}].{field}")
    return docker


class ContainerBuildStage(Stage):
    """Builds the docker image archive with nix2container and stashes it.

    The archive is stashed under the image tag; the local tarball is gone
    once this stage returns.
    """

    name = "Docker Stage"

    def __init__(self, nix: NixClient, artifacts: ArtifactRepository, dry_run: bool = False):
        super().__init__(dry_run)
        self.nix: NixClient = nix
        self.artifacts: ArtifactRepository = artifacts

    def build_container(self, config: RunConfiguration) -> ContainerArchiveHandle:
        with self.stage():
            docker = validate_container_configuration(config.docker)
            tarball_name = config.docker_image_tarball_name

            self.nix.copy_to_docker_archive(docker.flake_output, tarball_name)

            if self.dry_run:
                self.logger.info(f"Dry run mode. {tarball_name} has not been stashed as {docker.image_tag}")
                return ContainerArchiveHandle(key=docker.image_tag, filename=tarball_name, stored_at=datetime.now())

            workspace = self.nix.runner.cwd or os.getcwd()
            return self.artifacts.relocate(os.path.join(workspace, tarball_name), docker.image_tag)
