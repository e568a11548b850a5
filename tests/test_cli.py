"""Tests for the command line adapter."""

import pytest
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from conftest import ALICE_GENERIC, BOB_GENERIC, make_substrate
from vestview.chain.client import ChainClient
from vestview.cli import main, render_record, render_schedule
from vestview.errors import ConnectionFailedError
from vestview.models.balance import BalanceRecord, NetworkParameters
from vestview.models.schedule import ScheduleClassification, UpcomingRelease, VestingScheduleEntry
from vestview.session import ChainSession

NETWORK = NetworkParameters(prefix=42, unit="UNIT", decimals=3)


@pytest.fixture
def cli_env(fake_substrate):
    """Patch the session factory and logging setup used by main()."""
    sessions = []

    def make_session(config):
        session = ChainSession(
            config=config,
            client=ChainClient(interface_factory=Mock(return_value=fake_substrate)),
            relay_fetcher=Mock(return_value=500),
        )
        sessions.append(session)
        return session

    with patch("vestview.cli.ChainSession", side_effect=make_session), \
            patch("vestview.cli.configure_logging"):
        yield sessions


class TestRender:
    """Test output rendering."""

    def test_render_record(self):
        record = BalanceRecord("addr", "1.500", "1,500", "1.000 UNIT", "0.500 UNIT", "memo")
        assert render_record(record) == [
            "addr",
            "  decimal: 1.500",
            "  plancks: 1,500",
            "  free: 1.000 UNIT",
            "  reserved: 0.500 UNIT",
            "  note: memo",
        ]

    def test_render_empty_schedule(self):
        assert render_schedule(ScheduleClassification.empty(), NETWORK) == ["  schedules: None"]

    def test_render_schedule(self):
        single = VestingScheduleEntry(start=100, period=50, period_count=1, per_period=2_000)
        multi = VestingScheduleEntry(start=100, period=60, period_count=3, per_period=1_000)
        classification = ScheduleClassification(
            claimable_total=1_500,
            claimable_count=1,
            upcoming=(
                UpcomingRelease(single, 150, datetime(2024, 1, 1, tzinfo=timezone.utc)),
                UpcomingRelease(multi, 160, None, supported=False),
            ),
            relay_block_number=120,
        )

        lines = render_schedule(classification, NETWORK)

        assert lines[0] == "  relay block: 120"
        assert lines[1] == "  claimable: 1.500 UNIT (1 entries)"
        assert lines[3] == "    block 150 (~2024-01-01T00:00:00+00:00): 2.000 UNIT"
        assert lines[4] == "    block 160: Unsupported (3 periods of 1.000 UNIT)"


class TestMain:
    """Test the main entry point."""

    def test_lookup_and_export(self, cli_env, tmp_path, capsys):
        export = tmp_path / "log.tsv"

        code = main([ALICE_GENERIC, BOB_GENERIC, "--note", "audit", "--export", str(export),
                     "--config-dir", str(tmp_path)])

        assert code == 0
        out = capsys.readouterr().out
        assert ALICE_GENERIC in out
        assert "  decimal: 1.75000000" in out
        assert "  schedules: None" in out
        assert "Exported 2 accounts" in out
        assert export.read_text().splitlines()[0].startswith("address\t")
        assert cli_env[0].is_connected is False

    def test_invalid_address_reported(self, cli_env, tmp_path, capsys):
        code = main(["garbage", "--config-dir", str(tmp_path)])

        assert code == 0
        assert "garbage: Invalid: " in capsys.readouterr().out

    def test_connection_failure(self, tmp_path, capsys):
        session = Mock()
        session.connect.side_effect = ConnectionFailedError("refused", endpoint="ws://x")

        with patch("vestview.cli.ChainSession", return_value=session), \
                patch("vestview.cli.configure_logging"):
            code = main([ALICE_GENERIC, "--config-dir", str(tmp_path)])

        assert code == 1
        assert "Connection failed" in capsys.readouterr().err

    def test_invalid_configuration(self, tmp_path, capsys):
        (tmp_path / "networks.yaml").write_text(
            "networks:\n  42:\n    relay:\n      cache_ttl_ms: -5\n"
        )

        with patch("vestview.cli.configure_logging"):
            code = main([ALICE_GENERIC, "--config-dir", str(tmp_path)])

        assert code == 2
        assert "cache_ttl_ms" in capsys.readouterr().err

    def test_short_address_reported(self, cli_env, tmp_path, capsys):
        code = main(["27", "--config-dir", str(tmp_path)])

        assert code == 0
        assert "27: Invalid: " in capsys.readouterr().out

    def test_node_prefix_config_reaches_relay_cache(self, tmp_path, capsys):
        (tmp_path / "networks.yaml").write_text(
            "networks:\n  90:\n    relay:\n      cache_ttl_ms: 1234\n"
        )
        substrate = make_substrate(properties={"ss58Format": 90, "tokenSymbol": "FRQCY",
                                               "tokenDecimals": 8})
        sessions = []

        def make_session(config):
            session = ChainSession(
                config=config,
                client=ChainClient(interface_factory=Mock(return_value=substrate)),
            )
            sessions.append(session)
            return session

        with patch("vestview.cli.ChainSession", side_effect=make_session), \
                patch("vestview.cli.configure_logging"):
            code = main(["27", "--config-dir", str(tmp_path)])

        assert code == 0
        assert sessions[0].config.relay.cache_ttl_ms == 1234
        assert sessions[0].relay_cache.ttl_ms == 1234
