"""
Core data models for the invader comparator.

All models are plain data structures shared by the runner, storage and CLI.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class PlayerData:
    """
    A player's gallery as returned by the gallery data source.

    When a gallery could not be loaded, ``player`` falls back to the UID
    and ``invaders`` is empty.
    """

    player: str  # Display name (or UID fallback)
    invaders: list[str] = field(default_factory=list)

    @property
    def invader_count(self) -> int:
        """Number of invaders in the gallery."""
        return len(self.invaders)


@dataclass
class UIDList:
    """Reference UID plus the UIDs to compare against."""

    my_uid: str = ""
    others_uids: list[str] = field(default_factory=list)

    @property
    def all_uids(self) -> list[str]:
        """Reference UID first, then the others, with blanks removed."""
        return [uid for uid in [self.my_uid, *self.others_uids] if uid]

    def to_dict(self) -> dict:
        return {"myUid": self.my_uid, "othersUids": list(self.others_uids)}

    @classmethod
    def from_dict(cls, data: dict) -> "UIDList":
        my_uid = data.get("myUid") or ""
        others = data.get("othersUids") or []
        return cls(
            my_uid=str(my_uid),
            others_uids=[str(uid) for uid in others if isinstance(uid, str)],
        )


@dataclass
class PlayerComparison:
    """
    Comparison outcome for a single target player.

    ``exclusive_invaders`` holds the invaders the player owns that the
    reference player does not, sorted ascending.
    """

    uid: str
    name: str
    invader_count: int
    exclusive_invaders: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if the player's gallery loaded without errors."""
        return len(self.errors) == 0

    @property
    def exclusive_count(self) -> int:
        return len(self.exclusive_invaders)

    def to_dict(self) -> dict:
        """Convert to a dictionary for JSON export."""
        return {
            "uid": self.uid,
            "name": self.name,
            "invader_count": self.invader_count,
            "exclusive_count": self.exclusive_count,
            "exclusive_invaders": list(self.exclusive_invaders),
            "errors": list(self.errors),
            "success": self.success,
        }


@dataclass
class ComparisonReport:
    """
    Complete results for one comparison run.

    Represents the full output of a job run.
    """

    started_at: datetime
    finished_at: Optional[datetime]
    reference_uid: str
    reference: PlayerData
    comparisons: list[PlayerComparison]
    filter_term: str | None = None
    reference_errors: list[str] = field(default_factory=list)

    @property
    def players_compared(self) -> int:
        return len(self.comparisons)

    @property
    def players_failed(self) -> int:
        """Number of players (reference included) whose gallery failed to load."""
        failed = sum(1 for comparison in self.comparisons if not comparison.success)
        if self.reference_errors:
            failed += 1
        return failed

    @property
    def results(self) -> dict[str, list[str]]:
        """Exclusive invaders keyed by display name."""
        return {
            comparison.name: list(comparison.exclusive_invaders)
            for comparison in self.comparisons
        }

    @property
    def total_exclusive(self) -> int:
        return sum(comparison.exclusive_count for comparison in self.comparisons)

    def get_failed_comparisons(self) -> list[PlayerComparison]:
        """Get all target players whose gallery failed to load."""
        return [comparison for comparison in self.comparisons if not comparison.success]
