"""
Centralized logging configuration for the vestview lookup client.

This module provides standardized logging configuration using structlog
for all components. Lookup results are written to the log as structured
events, which replaces the in-page log list of the browser tool.
"""
import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

if TYPE_CHECKING:
    from ..models.balance import BalanceRecord
    from ..models.schedule import ScheduleClassification


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_lookup_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for account lookup results.

    Every balance record and schedule summary goes through this logger so
    the session log can be filtered on the ``lookup`` subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for lookup results
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="lookup",
        audit_trail=True
    )


def log_balance_record(
    logger: FilteringBoundLogger,
    record: "BalanceRecord",
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a balance lookup with standardized format.

    Args:
        logger: Structlog logger instance
        record: Balance record produced by the aggregator
        context: Additional context data
    """
    bound_logger = logger.bind(
        account=record.account,
        decimal=record.decimal,
        plancks_total=record.plancks_total,
        free=record.free,
        reserved=record.reserved,
        note=record.note,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Balance logged")


def log_schedule_classification(
    logger: FilteringBoundLogger,
    account: str,
    classification: "ScheduleClassification",
    relay_block_number: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a time-release schedule summary with standardized format.

    Args:
        logger: Structlog logger instance
        account: Normalized account address
        classification: Result of schedule classification
        relay_block_number: Relay chain height the schedule was classified at
        context: Additional context data
    """
    bound_logger = logger.bind(
        account=account,
        relay_block_number=relay_block_number,
        claimable_count=classification.claimable_count,
        claimable_total=str(classification.claimable_total),
        upcoming_count=len(classification.upcoming),
        unsupported_count=classification.unsupported_count,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if classification.is_empty:
        bound_logger.info("No time-release schedules")
    else:
        bound_logger.info("Time-release schedules classified")
