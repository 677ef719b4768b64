from pydantic.dataclasses import dataclass

from .artifacts import StashEntry

@dataclass(frozen=True)
class StashIndexFile:
    entries: list[StashEntry]
