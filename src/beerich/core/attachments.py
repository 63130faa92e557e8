"""Storage for files attached to invoices."""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from beerich.core.errors import StoreError

logger = logging.getLogger(__name__)

# Longest name most filesystems accept, minus the unique prefix
MAX_ORIGINAL_NAME = 255 - 9


def _shorten(name: str) -> str:
    """Trims the stem of ``name`` so it fits MAX_ORIGINAL_NAME bytes, keeping the suffix."""
    if len(name.encode()) <= MAX_ORIGINAL_NAME:
        return name
    path = Path(name)
    suffix = path.suffix if len(path.suffix.encode()) < 16 else ""
    budget = MAX_ORIGINAL_NAME - len(suffix.encode())
    stem = path.stem.encode()[:budget].decode(errors="ignore")
    return stem + suffix


class AttachmentStore(ABC):
    """Stores and deletes attachment files by name."""

    @abstractmethod
    def save(self, file_name: str, data: bytes) -> str:
        """Stores ``data`` and returns the name it was stored under."""

    @abstractmethod
    def delete(self, file_name: str) -> None:
        """Deletes a stored file. Deleting a missing file is not an error."""

    @abstractmethod
    def path_for(self, file_name: str) -> Path:
        """Returns the local path of a stored file."""


class LocalAttachmentStore(AttachmentStore):
    """Keeps attachments as plain files in a single directory."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def path_for(self, file_name: str) -> Path:
        # Only bare names are accepted so callers cannot escape the root
        name = Path(file_name).name
        if not name or name != file_name or name in (".", ".."):
            raise StoreError(f"Invalid attachment name: {file_name!r}")
        return self.root / name

    def save(self, file_name: str, data: bytes) -> str:
        """Writes the file under a unique name derived from ``file_name``."""
        original = _shorten(Path(file_name).name or "attachment")
        stored_name = f"{uuid.uuid4().hex[:8]}-{original}"
        path = self.path_for(stored_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StoreError(f"Could not save attachment {original}: {e}") from e
        logger.info(f"Saved attachment {stored_name} ({len(data)} bytes).")
        return stored_name

    def delete(self, file_name: str) -> None:
        self.path_for(file_name).unlink(missing_ok=True)
        logger.info(f"Deleted attachment {file_name}.")
