import os

from flake_ci.clients import AwsClient, CommandRunner, DockerClient
from flake_ci.errors import RegistryPushError
from flake_ci.models import ContainerArchiveHandle, ContainerConfiguration, DeploymentTarget
from flake_ci.repositories import ArtifactRepository
from flake_ci.services.stage import Stage
from flake_ci.utils.settings import AWS_AGENT_LABEL


class RegistryPushStage(Stage):
    """Pushes the stashed image to every configured ECR registry, in order.

    Runs in the workspace of the agent selected by ``agent_label``. The first
    failing target aborts the stage; later targets are never attempted.
    """

    def __init__(
        self,
        artifacts: ArtifactRepository,
        workspace_root: str,
        runner: CommandRunner | None = None,
        agent_label: str = AWS_AGENT_LABEL,
        dry_run: bool = False,
    ):
        super().__init__(dry_run)
        self.artifacts: ArtifactRepository = artifacts
        self.agent_label: str = agent_label
        self.workspace: str = os.path.join(workspace_root, agent_label)
        agent_runner = (runner or CommandRunner(dry_run=dry_run)).in_directory(self.workspace)
        self.docker: DockerClient = DockerClient(agent_runner)
        self.aws: AwsClient = AwsClient(agent_runner)

    def push_all(self, docker_config: ContainerConfiguration, handle: ContainerArchiveHandle) -> None:
        self.logger.info(f"Switching to agent with label {self.agent_label}")
        os.makedirs(self.workspace, exist_ok=True)

        image_id = self.load_image(handle)
        for target in docker_config.aws_accounts:
            with self.stage(f"Docker Push {target.label}"):
                try:
                    self.authenticate_and_push(image_id, docker_config, target)
                except Exception as e:
                    raise RegistryPushError(target.label, e) from e

    def load_image(self, handle: ContainerArchiveHandle) -> str:
        if self.dry_run:
            archive = os.path.join(self.workspace, handle.filename)
            self.logger.info(f"Dry run mode. Stash {handle.key} has not been retrieved")
            return self.docker.load(archive)

        archive = self.artifacts.retrieve(handle.key, self.workspace)
        try:
            image_id = self.docker.load(archive)
        finally:
            # the workspace is reused by later runs on this agent
            os.remove(archive)
        # the image now lives in the local docker daemon
        self.artifacts.drop(handle.key)
        return image_id

    def authenticate_and_push(
        self, image_id: str, docker_config: ContainerConfiguration, target: DeploymentTarget
    ) -> None:
        password = self.aws.ecr_login_password(target.region)
        self.docker.login(target.registry_endpoint, password)

        reference = docker_config.image_reference(target.ns)
        self.docker.tag(image_id, reference)
        self.docker.push(reference)
        self.logger.info(f"Pushed {reference} to {target.registry_endpoint}")
