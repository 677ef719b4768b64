import os
from typing import Any

from ruamel.yaml import YAML
from flake_ci.models import RunConfiguration
from flake_ci.utils.yaml_loader import get_yaml_instance


class PipelineConfigRepository:
    def __init__(self, file_path: str):
        self.file_path: str = file_path
        self.yaml: YAML = get_yaml_instance()

    def load(self) -> dict[str, Any]:
        if not os.path.isfile(self.file_path):
            return {}
        with open(self.file_path, "r") as f:
            data = self.yaml.load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("Invalid pipeline config: top level must be a mapping")
        try:
            RunConfiguration.from_dict(data)
        except Exception as e:
            raise ValueError(f"Invalid pipeline config: {e}") from e
        return dict(data)
