"""
Command line adapter for balance and time-release schedule lookups.

Connects to a node, looks up each address given on the command line,
prints the balance record and schedule summary, optionally writes the
spreadsheet export, and disconnects.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .balances.decimal import format_human
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .errors import NetworkFailureError
from .logging.config import configure_logging
from .models.balance import BalanceRecord, NetworkParameters
from .models.schedule import ScheduleClassification
from .session import ChainSession
from .utils.time import format_estimate


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vestview",
        description="Look up account balances and time-release schedules",
    )
    parser.add_argument("addresses", nargs="+", metavar="ADDRESS",
                        help="SS58 address or 0x-prefixed public key")
    parser.add_argument("--endpoint", default=None,
                        help="Provider preset name or ws:// / wss:// URI")
    parser.add_argument("--note", default=None, help="Note attached to every lookup")
    parser.add_argument("--export", type=Path, default=None, metavar="FILE",
                        help="Write the account log as tab-separated rows")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory containing networks.yaml")
    parser.add_argument("--log-level", default=None, help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser.parse_args(argv)


def render_record(record: BalanceRecord) -> list[str]:
    """Render a balance record as a headline and one line per field."""
    lines = [
        record.account,
        f"  decimal: {record.decimal}",
        f"  plancks: {record.plancks_total}",
        f"  free: {record.free}",
        f"  reserved: {record.reserved}",
    ]
    if record.note:
        lines.append(f"  note: {record.note}")
    return lines


def render_schedule(classification: ScheduleClassification, network: NetworkParameters) -> list[str]:
    """Render a schedule classification; accounts without schedules show "None"."""
    if classification.is_empty:
        return ["  schedules: None"]

    def amount(value: int) -> str:
        return format_human(value, network.decimals, network.unit)

    lines = [
        f"  relay block: {classification.relay_block_number}",
        f"  claimable: {amount(classification.claimable_total)}"
        f" ({classification.claimable_count} entries)",
    ]

    if not classification.upcoming:
        lines.append("  upcoming: None")
        return lines

    lines.append("  upcoming:")
    for release in classification.upcoming:
        if release.supported:
            lines.append(
                f"    block {release.unlock_block} (~{format_estimate(release.unlock_estimate)}):"
                f" {amount(release.amount)}"
            )
        else:
            lines.append(
                f"    block {release.unlock_block}: Unsupported"
                f" ({release.entry.period_count} periods of {amount(release.amount)})"
            )
    return lines


def load_config(config_dir: Optional[Path], prefix: Optional[int] = None) -> DefaultConfig:
    """Load and validate configuration for a network prefix."""
    loader = ConfigLoader.create(config_dir)
    if prefix is None:
        prefix = loader.defaults.chain.fallback_prefix

    merged = loader.merge_config(prefix)
    errors = ConfigValidator.validate_config(merged)
    if errors:
        details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors)
        raise ValueError(f"Invalid configuration: {details}")

    return loader.build_config(prefix)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config_dir)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    configure_logging(
        level=args.log_level or config.logging.level,
        format_json=args.json_logs or config.logging.format_json,
    )

    session = ChainSession(config)
    try:
        network = session.connect(args.endpoint)
    except NetworkFailureError as e:
        print(f"Connection failed: {e}", file=sys.stderr)
        return 1

    try:
        if network.prefix != config.chain.fallback_prefix:
            session.apply_config(load_config(args.config_dir, network.prefix))

        for address in args.addresses:
            validation = session.validate(address)
            if not validation.valid:
                print(f"{address}: {validation.field_message}")
                continue

            result = session.lookup(address, args.note)
            if result is None:
                continue

            lines = render_record(result.record)
            if result.schedule is not None:
                lines.extend(render_schedule(result.schedule, session.network))
            print("\n".join(lines))

        if args.export is not None:
            path = session.write_export(args.export)
            print(f"Exported {len(session.records)} accounts to {path}")

    except NetworkFailureError as e:
        print(f"Lookup failed: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2
    finally:
        session.disconnect()

    return 0


if __name__ == "__main__":
    sys.exit(main())
