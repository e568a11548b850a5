"""
Lookup session coordinator.

Owns the chain connection, the active network parameters, the relay block
height cache and the session's account log, and runs balance and schedule
lookups against them.
"""

import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

import structlog

from .balances.aggregator import aggregate
from .chain.address import AddressValidation, validate_address
from .chain.client import ChainClient
from .chain.relay import RelayBlockCache, RelayFetcher, fetch_relay_block_number
from .config.defaults import DefaultConfig, get_default_config
from .errors import NotConnectedError
from .export.spreadsheet import to_tsv, write_tsv
from .logging.config import get_lookup_logger, log_balance_record, log_schedule_classification
from .models.balance import BalanceRecord, NetworkParameters, RawBalance
from .models.schedule import LookupResult, ScheduleClassification, VestingScheduleEntry
from .schedules.classifier import classify
from .utils.time import from_epoch_ms, now_ms

logger = structlog.get_logger(__name__)
lookup_logger = get_lookup_logger(__name__)


class ChainSession:
    """
    Session state for balance and time-release schedule lookups.

    Lookups are no-ops while disconnected or for invalid addresses. Each
    lookup takes a request token; a response that arrives after a newer
    lookup has started is discarded instead of overwriting newer results.
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        client: Optional[ChainClient] = None,
        relay_cache: Optional[RelayBlockCache] = None,
        relay_fetcher: RelayFetcher = fetch_relay_block_number,
        now_fn=now_ms
    ) -> None:
        self.config = config or get_default_config()
        self.client = client or ChainClient(
            vesting_pallet=self.config.chain.vesting_pallet,
            vesting_storage=self.config.chain.vesting_storage,
        )
        self.relay_cache = relay_cache or self._build_relay_cache()
        self.relay_fetcher = relay_fetcher
        self.now_fn = now_fn

        self.network = self.fallback_network
        self.records: dict[str, BalanceRecord] = {}

        self._request_lock = threading.Lock()
        self._active_token = 0

    def apply_config(self, config: DefaultConfig) -> None:
        """
        Switch to another configuration while connected.

        The relay cache is rebuilt from the new relay settings and the
        client queries the new schedule storage. The cached relay height
        is dropped since it may belong to another relay chain.
        """
        self.config = config
        self.relay_cache = self._build_relay_cache()
        self.client.vesting_pallet = config.chain.vesting_pallet
        self.client.vesting_storage = config.chain.vesting_storage

        logger.info(
            "Session configuration applied",
            vesting_pallet=config.chain.vesting_pallet,
            vesting_storage=config.chain.vesting_storage,
            relay_cache_ttl_ms=config.relay.cache_ttl_ms
        )

    @property
    def fallback_network(self) -> NetworkParameters:
        chain = self.config.chain
        return NetworkParameters(
            prefix=chain.fallback_prefix,
            unit=chain.fallback_unit,
            decimals=chain.fallback_decimals,
        )

    @property
    def is_connected(self) -> bool:
        return self.client.is_connected

    # Connection lifecycle

    def resolve_endpoint(self, name_or_uri: Optional[str] = None) -> str:
        """Resolve a provider preset name or custom URI to an endpoint."""
        if not name_or_uri:
            return self.config.chain.default_endpoint
        return self.config.chain.providers.get(name_or_uri, name_or_uri)

    def connect(self, name_or_uri: Optional[str] = None) -> NetworkParameters:
        """Connect to a node and load its network parameters."""
        endpoint = self.resolve_endpoint(name_or_uri)

        if self.client.is_connected:
            self.disconnect()

        self.client.connect(endpoint)
        self.network = self.client.get_network_parameters(self.fallback_network)

        logger.info(
            "Session connected",
            endpoint=endpoint,
            prefix=self.network.prefix,
            unit=self.network.unit,
            decimals=self.network.decimals
        )
        return self.network

    def disconnect(self) -> None:
        """Close the connection and restore the fallback network parameters."""
        try:
            self.client.disconnect()
        finally:
            self.network = self.fallback_network
        logger.info("Session disconnected")

    def require_connection(self, operation: str) -> None:
        """Raise when no chain connection is active."""
        if not self.client.is_connected:
            raise NotConnectedError(operation=operation)

    def current_block_height(self) -> int:
        """Height of the latest block of the connected chain."""
        self.require_connection("chain_getHeader")
        return self.client.get_latest_block_height()

    # Request tokens

    def begin_request(self) -> int:
        """Start a lookup and make its token the active one."""
        with self._request_lock:
            self._active_token += 1
            return self._active_token

    def is_current(self, token: int) -> bool:
        with self._request_lock:
            return token == self._active_token

    # Lookups

    def validate(self, address: str) -> AddressValidation:
        """Validate an address under the active network prefix."""
        return validate_address(address, self.network.prefix)

    def get_relay_block_number(self) -> int:
        """Current relay chain block height, served from the cache when fresh."""
        self.require_connection("relay_block_number")
        return self.relay_cache.get_current_block(
            self.config.relay.endpoints,
            self.network.prefix,
            now_fn=self.now_fn,
            fetch_fn=self.relay_fetcher,
        )

    def log_balance(self, address: str, note: Optional[str] = None) -> Optional[BalanceRecord]:
        """Look up an account balance and store it in the account log."""
        normalized = self._prepare_lookup(address, "balance")
        if normalized is None:
            return None

        token = self.begin_request()
        raw = self.client.query_account(normalized)

        if not self._accept(token, normalized):
            return None

        return self._store_record(raw, normalized, note)

    def lookup_schedule(self, address: str) -> Optional[ScheduleClassification]:
        """Look up and classify the time-release schedules of an account."""
        normalized = self._prepare_lookup(address, "schedule")
        if normalized is None:
            return None

        token = self.begin_request()
        entries = self.client.query_vesting_schedules(normalized)
        classification = self._classify(entries)

        if not self._accept(token, normalized):
            return None

        log_schedule_classification(
            lookup_logger, normalized, classification, classification.relay_block_number
        )
        return classification

    def lookup(self, address: str, note: Optional[str] = None) -> Optional[LookupResult]:
        """Look up balance and schedules of an account as one request."""
        normalized = self._prepare_lookup(address, "lookup")
        if normalized is None:
            return None

        token = self.begin_request()
        raw = self.client.query_account(normalized)
        entries = self.client.query_vesting_schedules(normalized)
        classification = self._classify(entries)

        if not self._accept(token, normalized):
            return None

        record = self._store_record(raw, normalized, note)
        log_schedule_classification(
            lookup_logger, normalized, classification, classification.relay_block_number
        )
        return LookupResult(record=record, schedule=classification)

    # Account log

    def clear_log(self) -> None:
        """Forget every record of this session."""
        self.records = {}
        logger.info("Account log cleared")

    def export_tsv(self) -> str:
        """Account log as tab-separated rows in first-seen order."""
        return to_tsv(self.records.values())

    def write_export(self, path: Union[str, Path]) -> Path:
        """Write the account log export to a file."""
        return write_tsv(self.records.values(), path)

    # Internals

    def _prepare_lookup(self, address: str, operation: str) -> Optional[str]:
        """Return the normalized address, or None when there is nothing to do."""
        if not self.client.is_connected:
            logger.debug("Lookup skipped, not connected", operation=operation)
            return None

        address = (address or "").strip()
        if not address:
            return None

        validation = self.validate(address)
        if not validation.valid:
            logger.warning(
                "Lookup skipped, invalid address",
                operation=operation,
                address=address,
                prefix=self.network.prefix,
                reason=validation.reason
            )
            return None

        return validation.normalized or address

    def _build_relay_cache(self) -> RelayBlockCache:
        relay = self.config.relay
        return RelayBlockCache(
            ttl_ms=relay.cache_ttl_ms,
            fetch_retries=relay.fetch_retries,
            retry_delay_seconds=relay.retry_delay_seconds,
            retry_backoff=relay.retry_backoff,
        )

    def _accept(self, token: int, account: str) -> bool:
        if self.is_current(token):
            return True
        logger.info("Discarding stale lookup response", account=account, token=token)
        return False

    def _classify(self, entries: Iterable[VestingScheduleEntry]) -> ScheduleClassification:
        entries = list(entries)
        if not entries:
            return ScheduleClassification.empty()

        relay_block_number = self.get_relay_block_number()
        return classify(
            entries,
            relay_block_number,
            now=from_epoch_ms(self.now_fn()),
            block_time_ms=self.config.relay.block_time_ms,
        )

    def _store_record(self, raw: RawBalance, account: str, note: Optional[str]) -> BalanceRecord:
        fmt = self.config.format
        record = aggregate(
            raw,
            account,
            self.network.decimals,
            note=note,
            unit=self.network.unit,
            group_separator=fmt.group_separator,
            decimal_point=fmt.decimal_point,
        )
        self.records[record.account] = record
        log_balance_record(lookup_logger, record)
        return record
