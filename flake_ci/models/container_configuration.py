from typing import Any

from pydantic import Field
from pydantic.dataclasses import dataclass

from .coercion import as_str
from .deployment_target import DeploymentTarget

@dataclass(frozen=True)
class ContainerConfiguration:
    flake_output: str | None = None
    image_name: str | None = None
    image_tag: str | None = None
    aws_accounts: list[DeploymentTarget] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContainerConfiguration":
        return cls(
            flake_output=as_str(data.get("flakeOutput")),
            image_name=as_str(data.get("imageName")),
            # YAML reads tags such as 1.4 as numbers
            image_tag=as_str(data.get("imageTag")),
            aws_accounts=[
                a if isinstance(a, DeploymentTarget) else DeploymentTarget.from_dict(a)
                for a in data.get("awsAccounts") or []
            ],
        )

    def image_reference(self, ns: str) -> str:
        return f"{ns}/{self.image_name}:{self.image_tag}"
