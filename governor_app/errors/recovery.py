"""
Recoverable strike errors.

Every error here is contained at the attempt boundary: the attempt is
abandoned, the network is skipped for this tick, and the scheduler moves on.
"""

from typing import Optional, Dict, Any


class RecoverableError(Exception):
    """Base class for errors contained at the attempt boundary."""

    def __init__(self, message: str):
        super().__init__(message)
        self.recoverable = True


class StrikeAbortedError(RecoverableError):
    """Base class for an attempt abandoned before an outcome was observed."""

    def __init__(self, message: str, network: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.network = network
        self.context = context or {}


class PlanningError(StrikeAbortedError):
    """Balance or fee data could not be read."""


class SimulationRejectedError(StrikeAbortedError):
    """The action reverted when simulated against current network state."""

    def __init__(self, message: str, reason: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason


class SubmissionError(StrikeAbortedError):
    """The network refused to accept the signed action."""


class InsufficientFundsError(SubmissionError):
    """The account could not cover value plus fees at submission time."""


class ConfirmationError(RecoverableError):
    """Waiting for a confirmation failed or timed out after submission."""

    def __init__(self, message: str, tx_hash: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.tx_hash = tx_hash


def is_insufficient_funds(error: BaseException) -> bool:
    """Check whether a raw RPC error reports an insufficient balance."""
    return "insufficient funds" in str(error).lower()
