"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

from vestview.chain.client import ChainClient
from vestview.chain.relay import RelayBlockCache
from vestview.config.defaults import get_default_config
from vestview.models.schedule import VestingScheduleEntry
from vestview.session import ChainSession

# Well-known development key (//Alice)
ALICE_PUBLIC_KEY = "0xd43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
ALICE_GENERIC = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"   # prefix 42
ALICE_POLKADOT = "15oF4uVJwmo4TdGW7VfQxNLavjCXviqxT9S1MgbjMNHr6Sp5"  # prefix 0
BOB_GENERIC = "5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty"     # prefix 42

START_MS = 1_700_000_000_000


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def make_substrate(
    accounts: Optional[Dict[str, Dict[str, int]]] = None,
    schedules: Optional[Dict[str, List[Dict[str, int]]]] = None,
    properties: Optional[Dict[str, Any]] = None,
) -> Mock:
    """Build a SubstrateInterface stand-in answering storage queries."""
    accounts = accounts or {}
    schedules = schedules or {}

    substrate = Mock()
    substrate.properties = properties if properties is not None else {
        "ss58Format": 42,
        "tokenSymbol": "UNIT",
        "tokenDecimals": 8,
    }

    def query(module, storage_function, params):
        address = params[0]
        if module == "System":
            balance = accounts.get(address)
            value = {"nonce": 0, "data": balance} if balance is not None else None
            return Mock(value=value)
        return Mock(value=schedules.get(address, []))

    substrate.query.side_effect = query
    substrate.get_block_header.return_value = {"header": {"number": 4321}}
    return substrate


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_schedule_entries() -> List[VestingScheduleEntry]:
    """Schedule entries in the unordered form returned by the chain."""
    return [
        VestingScheduleEntry(start=250, period=50, period_count=1, per_period=3_000),
        VestingScheduleEntry(start=100, period=50, period_count=1, per_period=1_000),
        VestingScheduleEntry(start=50, period=100, period_count=1, per_period=2_000),
        VestingScheduleEntry(start=100, period=10, period_count=4, per_period=500),
    ]


@pytest.fixture
def fake_substrate() -> Mock:
    return make_substrate(
        accounts={ALICE_GENERIC: {"free": 150_000_000, "reserved": 25_000_000}},
        schedules={ALICE_GENERIC: [
            {"start": 100, "period": 50, "period_count": 1, "per_period": 100_000_000},
            {"start": 1_000, "period": 100, "period_count": 1, "per_period": 200_000_000},
        ]},
    )


@pytest.fixture
def relay_fetcher() -> Mock:
    return Mock(return_value=500)


@pytest.fixture
def session(fake_substrate, relay_fetcher, clock) -> ChainSession:
    """Session wired to fake collaborators, not yet connected."""
    config = get_default_config()
    client = ChainClient(interface_factory=Mock(return_value=fake_substrate))
    return ChainSession(
        config=config,
        client=client,
        relay_cache=RelayBlockCache(ttl_ms=config.relay.cache_ttl_ms),
        relay_fetcher=relay_fetcher,
        now_fn=clock,
    )


@pytest.fixture
def connected_session(session) -> ChainSession:
    session.connect("ws://127.0.0.1:9944")
    return session
