from datetime import datetime

from pydantic.dataclasses import dataclass

from flake_ci.errors import ToolExecutionError

OMNIX_CI_RUN = ["om", "ci", "run"]

@dataclass(frozen=True)
class BuildResultManifest:
    path: str

    def read(self) -> str:
        try:
            with open(self.path, "r") as f:
                return f.read()
        except OSError as e:
            raise ToolExecutionError(OMNIX_CI_RUN, None, f"results file {self.path} is not readable: {e}") from e

@dataclass(frozen=True)
class ContainerArchiveHandle:
    key: str
    filename: str
    stored_at: datetime

@dataclass(frozen=True)
class StashEntry:
    key: str
    filename: str
    stored_at: datetime
    size: int
