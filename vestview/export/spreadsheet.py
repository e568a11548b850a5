"""Tab-separated export of the session account log."""

from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

import structlog

from ..models.balance import BalanceRecord

logger = structlog.get_logger(__name__)

EXPORT_HEADER = ("address", "decimal", "plancksTotal", "free", "reserved", "note")


def _cell(value: Optional[str]) -> str:
    """Flatten a value so it cannot break the row/column structure."""
    if value is None:
        return ""
    return " ".join(str(value).replace("\t", " ").splitlines())


def to_rows(records: Iterable[BalanceRecord]) -> list[list[str]]:
    """
    Build export rows for balance records.

    Args:
        records: Balance records in first-seen order

    Returns:
        Header row followed by one row per record; empty when there are no records
    """
    rows = [
        [
            _cell(record.account),
            _cell(record.decimal),
            _cell(record.plancks_total),
            _cell(record.free),
            _cell(record.reserved),
            _cell(record.note),
        ]
        for record in records
    ]

    if not rows:
        return []

    return [list(EXPORT_HEADER), *rows]


def to_tsv(records: Iterable[BalanceRecord]) -> str:
    """Render balance records as tab-separated text."""
    return "\n".join("\t".join(row) for row in to_rows(records))


def write_tsv(
    records: Iterable[BalanceRecord],
    output_path: Union[str, Path],
    create_dirs: bool = True
) -> Path:
    """
    Write balance records to a tab-separated file.

    Args:
        records: Balance records in first-seen order
        output_path: Destination file, overwritten if it exists
        create_dirs: Create missing parent directories

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    if create_dirs:
        path.parent.mkdir(parents=True, exist_ok=True)

    rows = to_rows(records)
    content = "\n".join("\t".join(row) for row in rows)
    if content:
        content += "\n"

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    logger.info("Account log exported", output_path=str(path), records=max(len(rows) - 1, 0))
    return path
