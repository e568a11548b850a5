"""
Chain connection client.

Thin wrapper around ``substrateinterface.SubstrateInterface`` that exposes
the queries the lookup session needs and translates library failures into
the network error hierarchy.
"""

from collections.abc import Callable
from typing import Any, Optional

import structlog
from substrateinterface import SubstrateInterface

from ..errors import ConnectionFailedError, NotConnectedError, QueryFailedError
from ..models.balance import NetworkParameters, RawBalance
from ..models.schedule import VestingScheduleEntry

logger = structlog.get_logger(__name__)


class ChainClient:
    """Connection to a single Substrate node."""

    def __init__(
        self,
        vesting_pallet: str = "TimeRelease",
        vesting_storage: str = "ReleaseSchedules",
        interface_factory: Callable[..., Any] = SubstrateInterface
    ):
        self.vesting_pallet = vesting_pallet
        self.vesting_storage = vesting_storage
        self._interface_factory = interface_factory
        self._substrate: Optional[Any] = None
        self.endpoint: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self._substrate is not None

    def connect(self, endpoint: str) -> None:
        """Open a connection, closing any previous one first."""
        if self._substrate is not None:
            self.disconnect()

        try:
            self._substrate = self._interface_factory(url=endpoint)
        except Exception as e:
            self._substrate = None
            raise ConnectionFailedError(
                f"Failed to connect to {endpoint}: {e}",
                endpoint=endpoint,
            ) from e

        self.endpoint = endpoint
        logger.info("Connected to chain", endpoint=endpoint)

    def disconnect(self) -> None:
        """Close the connection; a no-op when not connected."""
        substrate, endpoint = self._substrate, self.endpoint
        self._substrate = None
        self.endpoint = None

        if substrate is None:
            return

        try:
            substrate.close()
        except Exception as e:
            raise ConnectionFailedError(
                f"Failed to disconnect from {endpoint}: {e}",
                endpoint=endpoint,
            ) from e

        logger.info("Disconnected from chain", endpoint=endpoint)

    def get_network_parameters(self, fallback: NetworkParameters) -> NetworkParameters:
        """Read address prefix and token denomination from system properties."""
        substrate = self._require_substrate("system_properties")
        try:
            properties = substrate.properties
        except Exception as e:
            raise QueryFailedError(
                f"Failed to read system properties: {e}",
                operation="system_properties",
                endpoint=self.endpoint,
            ) from e

        return NetworkParameters.from_properties(properties, fallback)

    def query_account(self, address: str) -> RawBalance:
        """Query free and reserved balance of an account."""
        value = self._query("System", "Account", address)
        return RawBalance.from_account_info(value)

    def query_vesting_schedules(self, address: str) -> list[VestingScheduleEntry]:
        """Query the time-release schedules of an account, in chain order."""
        value = self._query(self.vesting_pallet, self.vesting_storage, address)
        return [VestingScheduleEntry.from_chain(item) for item in value or []]

    def get_latest_block_height(self) -> int:
        """Height of the latest block of the connected chain."""
        substrate = self._require_substrate("chain_getHeader")
        try:
            header = substrate.get_block_header()
            return int(header["header"]["number"])
        except Exception as e:
            raise QueryFailedError(
                f"Failed to read latest block header: {e}",
                operation="chain_getHeader",
                endpoint=self.endpoint,
            ) from e

    def _query(self, module: str, storage_function: str, address: str) -> Any:
        operation = f"{module}.{storage_function}"
        substrate = self._require_substrate(operation)
        try:
            result = substrate.query(module, storage_function, [address])
        except Exception as e:
            raise QueryFailedError(
                f"Query {operation} failed: {e}",
                operation=operation,
                address=address,
                endpoint=self.endpoint,
            ) from e

        return result.value if result is not None else None

    def _require_substrate(self, operation: str) -> Any:
        if self._substrate is None:
            raise NotConnectedError(operation=operation)
        return self._substrate
