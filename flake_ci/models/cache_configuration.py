from typing import Any

from pydantic.dataclasses import dataclass

from .coercion import as_str, as_str_list

@dataclass(frozen=True)
class CacheConfiguration:
    cache: str | None = None
    prefix: str | None = None
    names: str | list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheConfiguration":
        return cls(
            cache=as_str(data.get("cache")),
            prefix=as_str(data.get("prefix")),
            names=as_str_list(data.get("names")),
        )

    def names_argument(self) -> str | None:
        """Allow-list as the single value of `--names`, None meaning push everything."""
        if self.names is None:
            return None
        if isinstance(self.names, str):
            value = self.names.strip()
        else:
            value = ",".join(n.strip() for n in self.names if n.strip())
        return value or None
