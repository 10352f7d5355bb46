"""
Gallery fetcher for retrieving player collections.

Talks to the Space Invaders gallery API and turns its JSON payload into
PlayerData. Failures are absorbed: the caller always receives a PlayerData,
plus an error message when something went wrong.
"""

import asyncio
from typing import Any

import httpx
from loguru import logger

from .models import PlayerData

DEFAULT_GALLERY_URL = (
    "https://api.space-invaders.com/flashinvaders_v3_pas_trop_predictif/api/gallery"
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; Invader-Comparator/1.0)"


class FetchError(Exception):
    """Base exception for fetch errors."""

    pass


class FetchTimeoutError(FetchError):
    """Exception raised when fetch times out."""

    pass


def parse_gallery(uid: str, payload: Any) -> PlayerData:
    """
    Build PlayerData from a raw gallery payload.

    The display name falls back to the UID when the payload has none.
    Invader names are stripped and deduplicated, keeping first-seen order.

    Args:
        uid: Player UID the payload was fetched for
        payload: Decoded JSON body

    Returns:
        PlayerData for the player
    """
    if not isinstance(payload, dict):
        return PlayerData(player=uid, invaders=[])

    player_info = payload.get("player")
    name = player_info.get("name") if isinstance(player_info, dict) else None
    player = str(name) if name else uid

    raw_invaders = payload.get("invaders") or {}
    if isinstance(raw_invaders, dict):
        entries = list(raw_invaders.values())
    elif isinstance(raw_invaders, list):
        entries = raw_invaders
    else:
        entries = []

    names: list[str] = []
    for entry in entries:
        raw_name = entry.get("name") if isinstance(entry, dict) else None
        names.append("" if raw_name is None else str(raw_name).strip())

    # dict.fromkeys dedupes while keeping order
    return PlayerData(player=player, invaders=list(dict.fromkeys(names)))


class GalleryFetcher:
    """
    Fetches player galleries from the remote gallery API.

    Uses httpx for HTTP requests. A shared client or a custom transport can
    be injected; an injected client is reused and left open for its owner.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GALLERY_URL,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the gallery fetcher.

        Args:
            base_url: Gallery endpoint; the UID is sent as the ``uid`` query parameter
            user_agent: Custom User-Agent header (optional)
            transport: httpx transport override (optional)
            client: Shared httpx client (optional, takes precedence over transport)
        """
        self.base_url = base_url
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.transport = transport
        self.client = client

    async def fetch(self, uid: str, timeout: int = 30000) -> tuple[PlayerData, str | None]:
        """
        Fetch a player's gallery.

        Args:
            uid: Player UID
            timeout: Timeout in milliseconds

        Returns:
            Tuple of (PlayerData, None) on success, or
            (PlayerData(player=uid, invaders=[]), error_message) on failure
        """
        start_time = asyncio.get_event_loop().time()

        try:
            payload = await self._get_json(uid, timeout)
        except FetchError as e:
            logger.warning("Failed to load gallery for UID {}: {}", uid, e)
            return PlayerData(player=uid, invaders=[]), str(e)

        data = parse_gallery(uid, payload)
        fetch_time_ms = int((asyncio.get_event_loop().time() - start_time) * 1000)
        logger.debug(
            "Loaded gallery for {} ({} invaders) in {}ms",
            data.player,
            data.invader_count,
            fetch_time_ms,
        )
        return data, None

    async def _get_json(self, uid: str, timeout: int) -> Any:
        """
        Perform the HTTP request and decode the JSON body.

        Raises:
            FetchTimeoutError: If the request times out
            FetchError: On transport errors, non-2xx status, or invalid JSON
        """
        # Convert timeout to seconds for httpx
        timeout_seconds = timeout / 1000.0

        headers = {"User-Agent": self.user_agent}

        try:
            if self.client is not None:
                response = await self.client.get(
                    self.base_url, params={"uid": uid}, headers=headers, timeout=timeout_seconds
                )
            else:
                async with httpx.AsyncClient(
                    timeout=timeout_seconds,
                    headers=headers,
                    transport=self.transport,
                ) as client:
                    response = await client.get(self.base_url, params={"uid": uid})

            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Timeout after {timeout}ms") from e
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"HTTP error: {str(e)}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON response: {str(e)}") from e
