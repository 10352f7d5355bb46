"""
Invader Comparator.

Core library for comparing Space Invaders galleries: finds the invaders
other players own that a reference player is missing. Reusable by the CLI
and any other front end.
"""

from .differ import ComparisonEngine, compare_invaders, filter_invaders, normalize
from .fetcher import GalleryFetcher
from .job_runner import ComparisonRunner
from .models import ComparisonReport, PlayerComparison, PlayerData, UIDList
from .registry import JSONFileRegistry, UIDRegistry

__all__ = [
    # Models
    "PlayerData",
    "UIDList",
    "PlayerComparison",
    "ComparisonReport",
    # Comparison engine
    "ComparisonEngine",
    "compare_invaders",
    "filter_invaders",
    "normalize",
    # Collaborators
    "GalleryFetcher",
    "UIDRegistry",
    "JSONFileRegistry",
    # Main entry point
    "ComparisonRunner",
]
