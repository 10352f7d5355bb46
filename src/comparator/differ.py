"""
Collection comparison engine.

Computes, for each named collection, the invaders it holds that the
reference collection does not. Pure functions: no I/O, no logging.
"""

from collections.abc import Iterable, Mapping


def normalize(item: str | None) -> str:
    """
    Normalize an invader name for comparison.

    Only leading/trailing whitespace is removed. Comparison stays
    case-sensitive and no Unicode normalization is applied.

    Args:
        item: Raw invader name (None is treated as an empty name)

    Returns:
        Stripped name
    """
    if item is None:
        return ""
    return item.strip()


def _normalized_set(items: Iterable[str | None] | None) -> set[str]:
    return {normalize(item) for item in (items or [])}


def compare_invaders(
    reference: Iterable[str | None] | None,
    others: Mapping[str, Iterable[str | None] | None] | None,
) -> dict[str, list[str]]:
    """
    Compare a reference collection against several named collections.

    Args:
        reference: Invader names owned by the reference player
        others: Mapping of display name to that player's invader names.
            A missing (None) collection counts as empty.

    Returns:
        Mapping with the same keys as ``others``; each value is the sorted,
        deduplicated list of normalized names absent from ``reference``.

    Example:
        >>> compare_invaders(["A", "B", "C"], {"P1": ["A", "B", "D"], "P2": ["C", "E"]})
        {'P1': ['D'], 'P2': ['E']}
    """
    reference_set = _normalized_set(reference)

    result: dict[str, list[str]] = {}
    for name, items in (others or {}).items():
        result[name] = sorted(_normalized_set(items) - reference_set)

    return result


def filter_invaders(
    results: Mapping[str, list[str]], term: str | None
) -> dict[str, list[str]]:
    """
    Apply a case-insensitive substring filter to comparison results.

    A blank or missing term leaves every list untouched. Order within
    each list is preserved, so sorted input stays sorted.

    Args:
        results: Output of ``compare_invaders``
        term: Free-text filter

    Returns:
        New mapping with the same keys and filtered lists
    """
    needle = (term or "").strip().lower()
    if not needle:
        return {name: list(items) for name, items in results.items()}

    return {
        name: [item for item in items if needle in item.lower()]
        for name, items in results.items()
    }


class ComparisonEngine:
    """
    Object wrapper around the comparison functions.

    Lets callers hold an engine instance alongside a fetcher, the same
    way the runner holds its other components.
    """

    def compare(
        self,
        reference: Iterable[str | None] | None,
        others: Mapping[str, Iterable[str | None] | None] | None,
    ) -> dict[str, list[str]]:
        """Compare ``reference`` against every collection in ``others``."""
        return compare_invaders(reference, others)

    def filter(self, results: Mapping[str, list[str]], term: str | None) -> dict[str, list[str]]:
        """Filter comparison results by a case-insensitive substring."""
        return filter_invaders(results, term)
