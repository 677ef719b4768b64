from typing import Any

from pydantic.dataclasses import dataclass

from .coercion import as_str

@dataclass(frozen=True)
class DeploymentTarget:
    name: str | None = None
    ns: str | None = None
    aws_account_id: str | None = None
    region: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeploymentTarget":
        return cls(
            name=as_str(data.get("name")),
            ns=as_str(data.get("ns")),
            # YAML reads bare account IDs as integers
            aws_account_id=as_str(data.get("awsAccountId")),
            region=as_str(data.get("region")),
        )

    @property
    def label(self) -> str:
        return self.name or self.ns or "unnamed"

    @property
    def registry_endpoint(self) -> str:
        return f"{self.aws_account_id}.dkr.ecr.{self.region}.amazonaws.com"
