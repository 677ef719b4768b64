from .artifact_repository import ArtifactRepository
from .pipeline_config_repository import PipelineConfigRepository

__all__ = [
    'ArtifactRepository',
    'PipelineConfigRepository'
]
