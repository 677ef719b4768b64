from dataclasses import dataclass, field
from enum import Enum

from .artifacts import BuildResultManifest, ContainerArchiveHandle


class PipelineStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass
class PipelineResult:
    status: PipelineStatus = PipelineStatus.SUCCESS
    stages: list[str] = field(default_factory=list)
    manifest: BuildResultManifest | None = None
    archive: ContainerArchiveHandle | None = None
    error: Exception | None = None
