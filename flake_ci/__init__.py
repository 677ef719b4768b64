from .services import PipelineController, run

__all__ = ["PipelineController", "run"]
