from typing import Any

from pydantic import Field
from pydantic.dataclasses import dataclass

from .cache_configuration import CacheConfiguration
from .coercion import as_str, as_str_list
from .container_configuration import ContainerConfiguration

@dataclass(frozen=True)
class RunConfiguration:
    system: str | None = None
    nix_args: list[str] = Field(default_factory=list)
    result_file_prefix: str = "omci"
    subflake: str = "ROOT"
    docker_image_tarball_name: str = "dockerImage.tar.gz"
    cachix: CacheConfiguration | None = None
    docker: ContainerConfiguration | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunConfiguration":
        # an empty block counts as absent
        cachix = data.get("cachix") or None
        docker = data.get("docker") or None
        if isinstance(cachix, dict):
            cachix = CacheConfiguration.from_dict(cachix)
        if isinstance(docker, dict):
            docker = ContainerConfiguration.from_dict(docker)
        nix_args = data.get("nixArgs") or []
        if not isinstance(nix_args, (list, tuple)):
            nix_args = [nix_args]
        return cls(
            system=as_str(data.get("system")),
            nix_args=as_str_list(list(nix_args)),
            result_file_prefix=as_str(data.get("resultFilePrefix", "omci")),
            subflake=as_str(data.get("subflake", "ROOT")),
            docker_image_tarball_name=as_str(data.get("dockerImageTarballName", "dockerImage.tar.gz")),
            cachix=cachix,
            docker=docker,
        )
