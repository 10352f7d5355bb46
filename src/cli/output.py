"""
Terminal output formatter for CLI.

Handles all display logic - no business logic, just presentation.
"""

import textwrap

from comparator.models import ComparisonReport, PlayerComparison, UIDList

WIDTH = 80


def print_report(report: ComparisonReport) -> None:
    """
    Print a human-readable comparison table to the terminal.

    Args:
        report: ComparisonReport for the run
    """
    print("\n" + "=" * WIDTH)
    print("INVADER COMPARISON REPORT")
    print("=" * WIDTH)
    print(f"\nReference:        {report.reference.player} ({report.reference_uid})")
    print(f"Reference Owns:   {report.reference.invader_count} invaders")
    print(f"Players Compared: {report.players_compared}")
    print(f"Players Failed:   {report.players_failed}")
    if report.filter_term:
        print(f"Filter:           {report.filter_term!r}")

    if report.finished_at:
        duration = (report.finished_at - report.started_at).total_seconds()
        print(f"Duration:         {duration:.1f} seconds")

    print(f"\n{'=' * WIDTH}")
    print(f"Invaders Missing From Reference: {report.total_exclusive}")
    print(f"{'=' * WIDTH}\n")

    if not report.comparisons:
        print("No players to compare.\n")
        return

    for i, comparison in enumerate(report.comparisons, 1):
        _print_comparison(i, comparison)

    if report.reference_errors:
        print(f"\n{'=' * WIDTH}")
        print("REFERENCE PLAYER FAILED TO LOAD")
        print(f"{'=' * WIDTH}\n")
        for error in report.reference_errors:
            print(f"    • {error}")

    failed = report.get_failed_comparisons()
    if failed:
        print(f"\n{'=' * WIDTH}")
        print(f"FAILED PLAYERS ({len(failed)})")
        print(f"{'=' * WIDTH}\n")

        for i, comparison in enumerate(failed, 1):
            print(f"[{i}] {comparison.uid}")
            for error in comparison.errors:
                print(f"    • {error}")
            print("-" * WIDTH + "\n")


def _print_comparison(index: int, comparison: PlayerComparison) -> None:
    print(f"[{index}] {comparison.name} ({comparison.uid})")
    print(
        f"    Owns {comparison.invader_count} invaders, "
        f"{comparison.exclusive_count} not owned by reference"
    )

    if comparison.exclusive_invaders:
        text = ", ".join(comparison.exclusive_invaders)
        for line in textwrap.wrap(text, width=WIDTH - 6):
            print(f"      {line}")
    elif comparison.success:
        print("      ✓ Nothing new")
    else:
        print("      ✗ Failed to load")

    print("-" * WIDTH)


def print_uids(uids: UIDList) -> None:
    """Print the registered UIDs."""
    print(f"Reference UID: {uids.my_uid or '(not set)'}")
    if not uids.others_uids:
        print("Other UIDs:    (none)")
        return

    print(f"Other UIDs ({len(uids.others_uids)}):")
    for uid in uids.others_uids:
        print(f"  • {uid}")
