import logging
from contextlib import contextmanager
from typing import Iterator

from flake_ci.utils.logging import setup_logger


class Stage:
    """Base for pipeline stages: a named, logged unit of work."""

    name: str = ""

    def __init__(self, dry_run: bool = False):
        self.dry_run: bool = dry_run
        self.logger: logging.Logger = setup_logger(self.__class__.__name__)

    @contextmanager
    def stage(self, label: str | None = None) -> Iterator[None]:
        label = label or self.name
        self.logger.info(f"Stage: {label}")
        try:
            yield
        except Exception as e:
            self.logger.error(f"Stage '{label}' failed: {e}")
            raise
        else:
            self.logger.info(f"Stage '{label}' completed")
