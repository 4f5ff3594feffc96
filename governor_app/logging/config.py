"""
Centralized logging configuration for the execution governor.

This module provides standardized logging configuration using structlog
for all components. Every module logs through structlog so gate decisions,
planning skips and strike outcomes share one structured format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


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


def get_gating_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for trust gate decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for gating decisions
    """
    return get_logger(name).bind(
        subsystem="gating",
        audit_trail=True
    )


def get_strike_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for strike submissions and their outcomes.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for strike execution
    """
    return get_logger(name).bind(
        subsystem="strike",
        audit_trail=True
    )


def log_gate_decision(
    logger: FilteringBoundLogger,
    gate_name: str,
    passed: bool,
    network: str,
    source: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a gating decision with standardized format.

    Rejections are routine (untrusted sources are expected), so they are
    logged at debug rather than warning.

    Args:
        logger: Structlog logger instance
        gate_name: Name of the gate being evaluated
        passed: Whether the gate passed or failed
        network: Network the attempt targets
        source: Signal source being gated
        reason: Detailed reason for the decision
        context: Additional context data
    """
    bound_logger = logger.bind(
        gate_name=gate_name,
        gate_result="PASS" if passed else "FAIL",
        network=network,
        source=source,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if passed:
        bound_logger.info("Gate passed")
    else:
        bound_logger.debug("Gate failed")


def log_strike_outcome(
    logger: FilteringBoundLogger,
    network: str,
    source: str,
    success: bool,
    trust_score: float,
    tx_hash: Optional[str] = None
) -> None:
    """
    Log a learned strike outcome with standardized format.

    Args:
        logger: Structlog logger instance
        network: Network the strike was submitted to
        source: Signal source that was scored
        success: Whether the confirmation reported acceptance
        trust_score: Trust score after the update
        tx_hash: Transaction hash, if known
    """
    bound_logger = logger.bind(
        network=network,
        source=source,
        outcome="ACCEPTED" if success else "FAILED",
        trust_score=round(trust_score, 4),
        tx_hash=tx_hash,
    )

    if success:
        bound_logger.info("Strike outcome learned")
    else:
        bound_logger.warning("Strike outcome learned")
