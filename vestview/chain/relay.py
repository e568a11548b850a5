"""
Relay chain block height cache.

Schedules are expressed in relay chain blocks, so classifying them needs
the current relay height, which requires a one-shot connection to a relay
chain node. The height is memoized in a single slot for a fixed lifetime.
"""

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Optional

import structlog
from substrateinterface import SubstrateInterface

from ..errors import RelayBlockFetchError, UnknownRelayChainError
from ..utils.time import now_ms

logger = structlog.get_logger(__name__)

DEFAULT_CACHE_TTL_MS = 60_000

RelayFetcher = Callable[[str], int]
Clock = Callable[[], int]


def fetch_relay_block_number(endpoint: str) -> int:
    """
    Fetch the latest relay chain block height over a one-shot connection.

    Args:
        endpoint: Relay chain RPC endpoint URI

    Returns:
        Height of the latest block header
    """
    substrate = SubstrateInterface(url=endpoint)
    try:
        header = substrate.get_block_header()
        return int(header["header"]["number"])
    finally:
        substrate.close()


@dataclass(frozen=True)
class RelayBlockCacheEntry:
    """Cached relay block height with the time it was stored."""
    cached_at_ms: int = 0
    block_number: Optional[int] = None


class RelayBlockCache:
    """Single-slot, time-limited cache of the relay chain block height."""

    def __init__(
        self,
        ttl_ms: int = DEFAULT_CACHE_TTL_MS,
        fetch_retries: int = 0,
        retry_delay_seconds: float = 1.0,
        retry_backoff: float = 2.0,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.ttl_ms = ttl_ms
        self.fetch_retries = fetch_retries
        self.retry_delay_seconds = retry_delay_seconds
        self.retry_backoff = retry_backoff
        self._sleep = sleep
        self._entry = RelayBlockCacheEntry()
        self._lock = threading.Lock()
        self._fetch_count = 0

    @property
    def entry(self) -> RelayBlockCacheEntry:
        return self._entry

    @property
    def fetch_count(self) -> int:
        """Number of successful fetches since creation."""
        return self._fetch_count

    def is_fresh(self, now: int) -> bool:
        """Whether the cached height can be served at time ``now``."""
        return self._servable(self._entry, now) is not None

    def _servable(self, entry: RelayBlockCacheEntry, now: int) -> Optional[int]:
        """Block number of ``entry`` if it is still fresh at ``now``."""
        if entry.block_number is None or now - entry.cached_at_ms >= self.ttl_ms:
            return None
        return entry.block_number

    def invalidate(self) -> None:
        """Drop the cached height, forcing the next read to fetch."""
        self._entry = RelayBlockCacheEntry()

    def get_current_block(
        self,
        prefix_to_endpoint: Mapping[int, str],
        prefix: int,
        now_fn: Clock = now_ms,
        fetch_fn: RelayFetcher = fetch_relay_block_number
    ) -> int:
        """
        Get the current relay chain block height.

        A fresh cached value is returned without any external call. On a
        miss the endpoint for ``prefix`` is fetched and the slot replaced.
        Concurrent misses are coalesced: callers waiting on the lock reuse
        the height stored by the first one.

        Args:
            prefix_to_endpoint: Network prefix to relay chain endpoint table
            prefix: Active network SS58 prefix
            now_fn: Clock returning epoch milliseconds
            fetch_fn: Fetches the latest height from an endpoint

        Returns:
            Relay chain block height

        Raises:
            UnknownRelayChainError: No endpoint is configured for the prefix
            RelayBlockFetchError: Every fetch attempt failed; the cache is unchanged
        """
        # The slot is read once per check; invalidate() may swap it concurrently
        cached = self._servable(self._entry, now_fn())
        if cached is not None:
            return cached

        with self._lock:
            # Another caller may have refreshed the slot while we waited
            cached = self._servable(self._entry, now_fn())
            if cached is not None:
                return cached

            endpoint = prefix_to_endpoint.get(prefix)
            if endpoint is None:
                raise UnknownRelayChainError(
                    f"No relay chain endpoint configured for prefix {prefix}",
                    prefix=prefix,
                )

            block_number = self._fetch_with_retry(endpoint, fetch_fn)
            self._entry = RelayBlockCacheEntry(cached_at_ms=now_fn(), block_number=block_number)
            self._fetch_count += 1

            logger.info(
                "Relay block height refreshed",
                endpoint=endpoint,
                block_number=block_number
            )

            return block_number

    def _fetch_with_retry(self, endpoint: str, fetch_fn: RelayFetcher) -> int:
        """Fetch with bounded retries and exponential backoff."""
        attempt = 0
        delay = self.retry_delay_seconds
        last_error: Optional[Exception] = None

        while attempt <= self.fetch_retries:
            try:
                return int(fetch_fn(endpoint))
            except Exception as e:
                last_error = e

            attempt += 1

            if attempt <= self.fetch_retries:
                logger.warning(
                    f"Relay block fetch attempt {attempt} failed, retrying in {delay}s",
                    endpoint=endpoint,
                    error=str(last_error)
                )
                self._sleep(delay)
                delay *= self.retry_backoff

        logger.error(
            "Relay block fetch failed",
            endpoint=endpoint,
            attempts=attempt,
            error=str(last_error)
        )
        raise RelayBlockFetchError(
            f"Failed to fetch relay block height from {endpoint}: {last_error}",
            attempts=attempt,
            endpoint=endpoint,
        ) from last_error
