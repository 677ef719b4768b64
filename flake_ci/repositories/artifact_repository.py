import logging
import os
import shutil
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ruamel.yaml import YAML
from flake_ci.errors import RelocationError
from flake_ci.models import ContainerArchiveHandle, StashEntry, StashIndexFile
from flake_ci.utils.yaml_loader import get_yaml_instance

logger = logging.getLogger(__name__)


class ArtifactRepository:
    """Stash store handing container archives from the build agent to the push agent.

    Archives live under ``<store_dir>/blobs/<key>/<filename>`` and are indexed in
    ``<store_dir>/stash.yaml``. The store directory has to be reachable from
    both agents.
    """

    INDEX_FILE = "stash.yaml"

    def __init__(self, store_dir: str, ttl_hours: float = 24):
        self.store_dir: str = store_dir
        self.ttl: timedelta = timedelta(hours=ttl_hours)
        self.yaml: YAML = get_yaml_instance(round_trip=False)

    @property
    def index_path(self) -> str:
        return os.path.join(self.store_dir, self.INDEX_FILE)

    def find_all(self) -> list[StashEntry]:
        if not os.path.isfile(path=Path(self.index_path)):
            return []
        with open(self.index_path, "r") as f:
            data = self.yaml.load(f)
            try:
                parsed = StashIndexFile(**data)
                return parsed.entries
            except Exception as e:
                raise RelocationError(f"Invalid stash index {self.index_path}: {e}") from e

    def find_by_key(self, key: str) -> StashEntry | None:
        return next((e for e in self.find_all() if e.key == key), None)

    def relocate(self, archive_path: str, key: str) -> ContainerArchiveHandle:
        self._check_key(key)
        self.prune_expired()
        if not os.path.isfile(archive_path):
            raise RelocationError(f"Archive {archive_path} does not exist, nothing to stash")
        size = os.path.getsize(archive_path)
        if size == 0:
            raise RelocationError(f"Archive {archive_path} is empty, refusing to stash it")

        filename = os.path.basename(archive_path)
        existing = self.find_by_key(key)
        if existing and existing.filename != filename:
            raise RelocationError(f"Stash {key} already holds {existing.filename}, cannot store {filename}")

        blob_path = self._blob_path(key, filename)
        try:
            os.makedirs(os.path.dirname(blob_path), exist_ok=True)
            shutil.copyfile(archive_path, blob_path)
        except OSError as e:
            raise RelocationError(f"Failed to stash {archive_path} as {key}: {e}") from e

        entry = StashEntry(key=key, filename=filename, stored_at=datetime.now(timezone.utc), size=size)
        self._save(entry)
        logger.info(f"Stashed {filename} ({size} bytes) as {key}")

        # A leftover archive makes the next image build fail on retry
        try:
            os.remove(archive_path)
        except OSError as e:
            raise RelocationError(f"Failed to remove local archive {archive_path}: {e}") from e

        return ContainerArchiveHandle(key=key, filename=filename, stored_at=entry.stored_at)

    def retrieve(self, key: str, destination_dir: str) -> str:
        self._check_key(key)
        entry = self.find_by_key(key)
        if entry is None:
            raise RelocationError(f"No stash found for key {key}")
        if self._is_expired(entry):
            raise RelocationError(f"Stash {key} expired (stored at {entry.stored_at.isoformat()})")

        blob_path = self._blob_path(key, entry.filename)
        if not os.path.isfile(blob_path):
            raise RelocationError(f"Stash {key} is indexed but {blob_path} is missing")

        destination = os.path.join(destination_dir, entry.filename)
        try:
            os.makedirs(destination_dir, exist_ok=True)
            shutil.copyfile(blob_path, destination)
        except OSError as e:
            raise RelocationError(f"Failed to unstash {key} into {destination_dir}: {e}") from e
        logger.info(f"Unstashed {key} to {destination}")
        return destination

    def prune_expired(self) -> list[str]:
        entries = self.find_all()
        expired = [e for e in entries if self._is_expired(e)]
        if not expired:
            return []
        for entry in expired:
            shutil.rmtree(os.path.join(self.store_dir, "blobs", entry.key), ignore_errors=True)
            logger.info(f"Pruned expired stash {entry.key}")
        expired_keys = [e.key for e in expired]
        self._write_entries([e for e in entries if e.key not in expired_keys])
        return expired_keys

    def drop(self, key: str) -> bool:
        self._check_key(key)
        entries = self.find_all()
        remaining = [e for e in entries if e.key != key]
        if len(remaining) == len(entries):
            return False
        shutil.rmtree(os.path.join(self.store_dir, "blobs", key), ignore_errors=True)
        self._write_entries(remaining)
        return True

    def _save(self, entry: StashEntry) -> None:
        entries = self.find_all()
        index = next((i for i, e in enumerate(entries) if e.key == entry.key), None)
        if index is not None:
            entries[index] = entry
        else:
            entries.append(entry)
        self._write_entries(entries)

    def _write_entries(self, entries: list[StashEntry]) -> None:
        try:
            os.makedirs(self.store_dir, exist_ok=True)
            with open(self.index_path, "w") as f:
                data = {"entries": [asdict(e) for e in entries]}
                self.yaml.dump(data, f)
        except Exception as e:
            raise RelocationError(f"Error writing stash index: {e}") from e

    def _is_expired(self, entry: StashEntry) -> bool:
        stored_at = entry.stored_at
        # entries written without an offset are UTC
        if stored_at.tzinfo is None:
            stored_at = stored_at.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) - stored_at > self.ttl

    def _blob_path(self, key: str, filename: str) -> str:
        return os.path.join(self.store_dir, "blobs", key, filename)

    @staticmethod
    def _check_key(key: str) -> None:
        if not key or "/" in key or os.sep in key or key in (".", ".."):
            raise RelocationError(f"Invalid stash key: {key!r}")
