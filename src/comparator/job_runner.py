"""
Job runner for orchestrating a full comparison.

Fetches the reference gallery and every target gallery, then runs the
comparison engine and packages the result as a ComparisonReport.
"""

import asyncio
from datetime import datetime

from loguru import logger

from .differ import ComparisonEngine
from .fetcher import DEFAULT_GALLERY_URL, GalleryFetcher
from .models import ComparisonReport, PlayerComparison, PlayerData


class ComparisonRunner:
    """
    Orchestrates fetching and comparing player galleries.

    Designed to be reusable by both the CLI and other callers.
    """

    def __init__(
        self,
        max_concurrency: int = 3,
        fetch_timeout: int = 30000,
        user_agent: str | None = None,
        base_url: str = DEFAULT_GALLERY_URL,
        fetcher: GalleryFetcher | None = None,
    ):
        """
        Initialize the comparison runner.

        Args:
            max_concurrency: Maximum number of galleries fetched concurrently
            fetch_timeout: Timeout for each gallery fetch in milliseconds
            user_agent: Custom User-Agent header (optional)
            base_url: Gallery endpoint
            fetcher: Pre-built fetcher (optional, overrides user_agent/base_url)
        """
        self.max_concurrency = max_concurrency
        self.fetch_timeout = fetch_timeout

        self.fetcher = fetcher or GalleryFetcher(base_url=base_url, user_agent=user_agent)
        self.engine = ComparisonEngine()

    async def run_async(
        self,
        reference_uid: str,
        other_uids: list[str],
        filter_term: str | None = None,
    ) -> ComparisonReport:
        """
        Run a comparison asynchronously.

        Args:
            reference_uid: UID of the reference player
            other_uids: UIDs of the players to compare against
            filter_term: Optional case-insensitive substring filter

        Returns:
            ComparisonReport for the run
        """
        started_at = datetime.now()
        reference_uid = reference_uid.strip()
        targets = self._clean_targets(reference_uid, other_uids)

        logger.info(
            "Comparing {} against {} player(s)", reference_uid, len(targets)
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        uids = [reference_uid, *targets]
        tasks = [self._fetch_player(uid, semaphore) for uid in uids]

        results = await asyncio.gather(*tasks, return_exceptions=True)

        fetched: list[tuple[PlayerData, list[str]]] = []
        for uid, result in zip(uids, results):
            if isinstance(result, Exception):
                fetched.append(
                    (PlayerData(player=uid, invaders=[]), [f"Unexpected error: {str(result)}"])
                )
            else:
                data, error = result
                fetched.append((data, [error] if error else []))

        reference, reference_errors = fetched[0]

        # Key each target by display name; duplicates get the UID appended,
        # then a counter if that is taken too
        named: dict[str, list[str]] = {}
        keys: list[str] = []
        for uid, (data, _errors) in zip(targets, fetched[1:]):
            key = self._unique_key(data.player, uid, named)
            named[key] = data.invaders
            keys.append(key)

        differences = self.engine.compare(reference.invaders, named)
        differences = self.engine.filter(differences, filter_term)

        comparisons = [
            PlayerComparison(
                uid=uid,
                name=key,
                invader_count=data.invader_count,
                exclusive_invaders=differences[key],
                errors=errors,
            )
            for uid, key, (data, errors) in zip(targets, keys, fetched[1:])
        ]

        report = ComparisonReport(
            started_at=started_at,
            finished_at=datetime.now(),
            reference_uid=reference_uid,
            reference=reference,
            comparisons=comparisons,
            filter_term=filter_term,
            reference_errors=reference_errors,
        )

        logger.info(
            "Comparison finished: {} exclusive invader(s), {} failure(s)",
            report.total_exclusive,
            report.players_failed,
        )
        return report

    def run(
        self,
        reference_uid: str,
        other_uids: list[str],
        filter_term: str | None = None,
    ) -> ComparisonReport:
        """
        Run a comparison synchronously.

        Convenience method that wraps run_async.
        """
        return asyncio.run(self.run_async(reference_uid, other_uids, filter_term))

    def _clean_targets(self, reference_uid: str, other_uids: list[str]) -> list[str]:
        """
        Strip and deduplicate target UIDs, keeping order.

        Blank UIDs and the reference UID itself are dropped.
        """
        targets: list[str] = []
        for uid in other_uids:
            uid = uid.strip()
            if not uid or uid == reference_uid or uid in targets:
                continue
            targets.append(uid)
        return targets

    def _unique_key(self, name: str, uid: str, taken: dict[str, list[str]]) -> str:
        """Pick a result key for a player that no earlier target uses."""
        if name not in taken:
            return name

        key = f"{name} ({uid})"
        counter = 2
        while key in taken:
            key = f"{name} ({uid}) #{counter}"
            counter += 1
        return key

    async def _fetch_player(
        self,
        uid: str,
        semaphore: asyncio.Semaphore,
    ) -> tuple[PlayerData, str | None]:
        async with semaphore:
            logger.debug("Fetching gallery for UID {}", uid)
            return await self.fetcher.fetch(uid, timeout=self.fetch_timeout)
