from .aws_client import AwsClient
from .cachix_client import CachixClient
from .command_runner import CommandRunner
from .docker_client import DockerClient
from .nix_client import NixClient
from .omnix_client import OmnixClient

__all__ = [
    "AwsClient",
    "CachixClient",
    "CommandRunner",
    "DockerClient",
    "NixClient",
    "OmnixClient",
]
