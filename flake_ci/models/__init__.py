from .artifacts import BuildResultManifest, ContainerArchiveHandle, StashEntry
from .cache_configuration import CacheConfiguration
from .container_configuration import ContainerConfiguration
from .deployment_target import DeploymentTarget
from .pipeline_result import PipelineResult, PipelineStatus
from .run_configuration import RunConfiguration
from .wrappers import StashIndexFile

__all__ = [
    "BuildResultManifest",
    "CacheConfiguration",
    "ContainerArchiveHandle",
    "ContainerConfiguration",
    "DeploymentTarget",
    "PipelineResult",
    "PipelineStatus",
    "RunConfiguration",
    "StashEntry",
    "StashIndexFile",
]
