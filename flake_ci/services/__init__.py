from .build_stage import BuildStage
from .cache_push_stage import CachePushStage
from .config_merger import DEFAULTS, ConfigMerger
from .container_build_stage import ContainerBuildStage
from .pipeline_controller import PipelineController, run
from .registry_push_stage import RegistryPushStage

__all__ = [
    "BuildStage",
    "CachePushStage",
    "ConfigMerger",
    "ContainerBuildStage",
    "DEFAULTS",
    "PipelineController",
    "RegistryPushStage",
    "run",
]
