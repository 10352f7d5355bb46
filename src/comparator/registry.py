"""
UID registry for the reference player and comparison targets.

Provides an abstract interface plus a JSON file implementation, so the
CLI can remember which players to compare between runs.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from .models import UIDList

DEFAULT_REGISTRY_PATH = Path.home() / ".invader_comparator" / "uids.json"


class RegistryError(Exception):
    """Base exception for registry errors."""

    pass


def _clean_uid(uid) -> str:
    if not uid or not isinstance(uid, str) or not uid.strip():
        raise RegistryError(f"Invalid UID: {uid!r}")
    return uid.strip()


class UIDRegistry(ABC):
    """
    Abstract interface for UID registries.

    Subclasses only provide load/save; the editing operations are shared.
    """

    @abstractmethod
    def load(self) -> UIDList:
        """
        Load the stored UIDs.

        Raises:
            RegistryError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def save(self, uids: UIDList) -> None:
        """
        Persist the UIDs.

        Raises:
            RegistryError: If the backing store cannot be written
        """
        pass

    def set_my_uid(self, uid: str) -> UIDList:
        """Replace the reference UID."""
        uids = self.load()
        uids.my_uid = _clean_uid(uid)
        self.save(uids)
        return uids

    def set_others_uids(self, others: list[str]) -> UIDList:
        """
        Replace the comparison targets.

        Non-string and blank entries are dropped, the rest are stripped.
        """
        if not isinstance(others, list):
            raise RegistryError("UIDs must be given as a list")

        uids = self.load()
        uids.others_uids = [
            uid.strip() for uid in others if isinstance(uid, str) and uid.strip()
        ]
        self.save(uids)
        return uids

    def add_other_uid(self, uid: str) -> UIDList:
        """Add a comparison target unless it is already registered."""
        clean = _clean_uid(uid)
        uids = self.load()
        if clean not in uids.others_uids:
            uids.others_uids.append(clean)
            self.save(uids)
        return uids

    def remove_other_uid(self, uid: str) -> UIDList:
        """Remove a comparison target. Unknown UIDs are ignored."""
        uids = self.load()
        uids.others_uids = [existing for existing in uids.others_uids if existing != uid]
        self.save(uids)
        return uids


class JSONFileRegistry(UIDRegistry):
    """
    File-based registry.

    Stores ``{"myUid": ..., "othersUids": [...]}``. A missing file reads
    as an empty registry.
    """

    def __init__(self, path: str | Path = DEFAULT_REGISTRY_PATH):
        """
        Initialize the file registry.

        Args:
            path: Location of the JSON file
        """
        self.path = Path(path)

    def load(self) -> UIDList:
        if not self.path.exists():
            return UIDList()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise RegistryError(f"Failed to read registry {self.path}: {str(e)}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Malformed registry {self.path}: expected an object")

        return UIDList.from_dict(data)

    def save(self, uids: UIDList) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(uids.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise RegistryError(f"Failed to write registry {self.path}: {str(e)}") from e

        logger.debug("Saved {} UIDs to {}", len(uids.all_uids), self.path)
