"""
Error classification system for the execution governor.

This module provides the exception hierarchy used to separate fatal startup
failures from the expected, attempt-local aborts of a strike.
"""

from .system_failures import (
    SystemFailureError,
    PreconditionError,
    NetworkInitError,
    PersistenceError,
)
from .recovery import (
    RecoverableError,
    StrikeAbortedError,
    PlanningError,
    SimulationRejectedError,
    SubmissionError,
    InsufficientFundsError,
    ConfirmationError,
    is_insufficient_funds,
)

__all__ = [
    # System Failures
    "SystemFailureError",
    "PreconditionError",
    "NetworkInitError",
    "PersistenceError",
    # Attempt-local aborts
    "RecoverableError",
    "StrikeAbortedError",
    "PlanningError",
    "SimulationRejectedError",
    "SubmissionError",
    "InsufficientFundsError",
    "ConfirmationError",
    "is_insufficient_funds",
]
