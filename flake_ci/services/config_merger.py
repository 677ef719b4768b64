from typing import Any, Mapping

from pydantic import ValidationError

from flake_ci.errors import ConfigurationError
from flake_ci.models import RunConfiguration

DEFAULTS: dict[str, Any] = {
    "resultFilePrefix": "omci",
    "subflake": "ROOT",
    "dockerImageTarballName": "dockerImage.tar.gz",
}


class ConfigMerger:
    @staticmethod
    def merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> RunConfiguration:
        """Shallow merge, overrides win key by key.

        Keys explicitly set to None in the overrides are treated as not given.
        Required fields are checked later by the stage that needs them; only
        values of the wrong shape are rejected here.
        """
        merged = dict(defaults)
        merged.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return RunConfiguration.from_dict(merged)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ConfigurationError(field, f"Invalid value for {field}: {error['msg']}") from e
