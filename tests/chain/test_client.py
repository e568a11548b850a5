"""Tests for the chain connection client"""

import pytest
from unittest.mock import Mock

from conftest import ALICE_GENERIC, make_substrate
from vestview.chain.client import ChainClient
from vestview.errors import (
    ConnectionFailedError,
    NetworkFailureError,
    NotConnectedError,
    QueryFailedError,
)
from vestview.models.balance import NetworkParameters, RawBalance
from vestview.models.schedule import VestingScheduleEntry

FALLBACK = NetworkParameters(prefix=42, unit="UNIT", decimals=8)


class TestConnection:
    """Test connect and disconnect"""

    def test_connect(self):
        substrate = make_substrate()
        factory = Mock(return_value=substrate)
        client = ChainClient(interface_factory=factory)

        client.connect("ws://node")

        factory.assert_called_once_with(url="ws://node")
        assert client.is_connected is True
        assert client.endpoint == "ws://node"

    def test_reconnect_closes_previous_connection(self):
        old, new = make_substrate(), make_substrate()
        client = ChainClient(interface_factory=Mock(side_effect=[old, new]))

        client.connect("ws://old")
        client.connect("ws://new")

        old.close.assert_called_once()
        assert client.endpoint == "ws://new"

    def test_connect_failure(self):
        client = ChainClient(interface_factory=Mock(side_effect=ConnectionRefusedError("refused")))

        with pytest.raises(ConnectionFailedError) as exc_info:
            client.connect("ws://down")

        assert exc_info.value.endpoint == "ws://down"
        assert isinstance(exc_info.value, NetworkFailureError)
        assert client.is_connected is False

    def test_disconnect(self):
        substrate = make_substrate()
        client = ChainClient(interface_factory=Mock(return_value=substrate))
        client.connect("ws://node")

        client.disconnect()

        substrate.close.assert_called_once()
        assert client.is_connected is False
        assert client.endpoint is None

    def test_disconnect_when_not_connected_is_noop(self):
        ChainClient(interface_factory=Mock()).disconnect()


class TestQueries:
    """Test storage queries"""

    @pytest.fixture
    def client(self, fake_substrate):
        client = ChainClient(interface_factory=Mock(return_value=fake_substrate))
        client.connect("ws://node")
        return client

    def test_query_account(self, client):
        assert client.query_account(ALICE_GENERIC) == RawBalance(free=150_000_000, reserved=25_000_000)

    def test_query_unknown_account(self, client):
        assert client.query_account("unknown") == RawBalance(free=0, reserved=0)

    def test_query_vesting_schedules(self, client, fake_substrate):
        entries = client.query_vesting_schedules(ALICE_GENERIC)

        assert entries == [
            VestingScheduleEntry(start=100, period=50, period_count=1, per_period=100_000_000),
            VestingScheduleEntry(start=1_000, period=100, period_count=1, per_period=200_000_000),
        ]
        fake_substrate.query.assert_called_with("TimeRelease", "ReleaseSchedules", [ALICE_GENERIC])

    def test_custom_vesting_storage(self, fake_substrate):
        client = ChainClient(vesting_pallet="Vesting", vesting_storage="Vesting",
                             interface_factory=Mock(return_value=fake_substrate))
        client.connect("ws://node")

        client.query_vesting_schedules(ALICE_GENERIC)
        fake_substrate.query.assert_called_with("Vesting", "Vesting", [ALICE_GENERIC])

    def test_query_without_schedules(self, client):
        assert client.query_vesting_schedules("unknown") == []

    def test_query_failure(self, client, fake_substrate):
        fake_substrate.query.side_effect = TimeoutError("timeout")

        with pytest.raises(QueryFailedError) as exc_info:
            client.query_account(ALICE_GENERIC)

        assert exc_info.value.operation == "System.Account"
        assert exc_info.value.address == ALICE_GENERIC

    def test_query_when_not_connected(self):
        with pytest.raises(NotConnectedError):
            ChainClient(interface_factory=Mock()).query_account(ALICE_GENERIC)

    def test_latest_block_height(self, client):
        assert client.get_latest_block_height() == 4321


class TestNetworkParameters:
    """Test network parameter loading"""

    def test_from_system_properties(self):
        substrate = make_substrate(properties={
            "ss58Format": 90, "tokenSymbol": "FRQCY", "tokenDecimals": 8,
        })
        client = ChainClient(interface_factory=Mock(return_value=substrate))
        client.connect("ws://node")

        assert client.get_network_parameters(FALLBACK) == NetworkParameters(90, "FRQCY", 8)

    def test_list_values_use_first_entry(self):
        params = NetworkParameters.from_properties(
            {"ss58Format": 0, "tokenSymbol": ["DOT", "USDT"], "tokenDecimals": [10, 6]},
            FALLBACK,
        )
        assert params == NetworkParameters(0, "DOT", 10)

    def test_missing_values_use_fallback(self):
        assert NetworkParameters.from_properties({}, FALLBACK) == FALLBACK
        assert NetworkParameters.from_properties(None, FALLBACK) == FALLBACK
