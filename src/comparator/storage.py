"""
Storage layer for persisting comparison reports.

Provides abstract interface for storage backends and file-based implementations
for CSV and JSON export.
"""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from .models import ComparisonReport


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


class Storage(ABC):
    """Abstract interface for storage backends."""

    @abstractmethod
    def save(
        self, report: ComparisonReport, format: str = "csv", output_path: str | None = None
    ) -> str:
        """
        Save a comparison report.

        Args:
            report: ComparisonReport to save
            format: Output format ('csv' or 'json')
            output_path: Optional output file path. If not provided, generates one.

        Returns:
            Path to the saved file (for file storage) or identifier

        Raises:
            StorageError: If save operation fails
        """
        pass


class FileStorage(Storage):
    """
    File-based storage implementation.

    Exports reports to CSV or JSON files.
    """

    def __init__(self, output_directory: str = "."):
        """
        Initialize file storage.

        Args:
            output_directory: Directory to save output files (default: current directory)
        """
        self.output_directory = Path(output_directory)

    def save(
        self, report: ComparisonReport, format: str = "csv", output_path: str | None = None
    ) -> str:
        format_lower = format.lower()

        if format_lower not in ("csv", "json"):
            raise StorageError(f"Unsupported format: {format}. Use 'csv' or 'json'.")

        if output_path is None:
            timestamp = report.started_at.strftime("%Y%m%d_%H%M%S")
            output_path = f"invader_comparison_{timestamp}.{format_lower}"

        output_file_path = self.output_directory / output_path

        try:
            self.output_directory.mkdir(parents=True, exist_ok=True)
            if format_lower == "csv":
                self._save_csv(report, output_file_path)
            else:  # json
                self._save_json(report, output_file_path)
        except OSError as e:
            raise StorageError(f"Failed to save results: {str(e)}") from e

        logger.info("Saved {} report to {}", format_lower.upper(), output_file_path)
        return str(output_file_path)

    def _save_csv(self, report: ComparisonReport, output_path: Path):
        """
        Save a report to CSV format.

        One row per (player, invader); players without exclusive invaders
        still get a row with an empty Invader cell.
        """
        with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
            csvfile.write("# Invader Comparison Report\n")
            csvfile.write(f"# Reference: {report.reference.player} ({report.reference_uid})\n")
            csvfile.write(f"# Generated: {report.finished_at}\n")
            csvfile.write(f"# Players Compared: {report.players_compared}\n")
            csvfile.write(f"# Players Failed: {report.players_failed}\n")
            if report.filter_term:
                csvfile.write(f"# Filter: {report.filter_term}\n")
            csvfile.write("\n")

            writer = csv.DictWriter(csvfile, fieldnames=["Player", "UID", "Invader"])
            writer.writeheader()

            for comparison in report.comparisons:
                invaders = comparison.exclusive_invaders or [""]
                for invader in invaders:
                    writer.writerow(
                        {"Player": comparison.name, "UID": comparison.uid, "Invader": invader}
                    )

    def _save_json(self, report: ComparisonReport, output_path: Path):
        """Save a report to JSON format."""
        data = {
            "metadata": {
                "started_at": report.started_at.isoformat(),
                "finished_at": report.finished_at.isoformat() if report.finished_at else None,
                "players_compared": report.players_compared,
                "players_failed": report.players_failed,
                "filter": report.filter_term,
            },
            "reference": {
                "uid": report.reference_uid,
                "name": report.reference.player,
                "invader_count": report.reference.invader_count,
                "errors": report.reference_errors,
            },
            "results": report.results,
            "players": [comparison.to_dict() for comparison in report.comparisons],
        }

        with open(output_path, "w", encoding="utf-8") as jsonfile:
            json.dump(data, jsonfile, indent=2, ensure_ascii=False)
