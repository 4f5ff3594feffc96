"""Per-tick strike models: signals, plans, actions and outcomes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Signal:
    """An externally derived hint that may trigger a strike."""
    ticker: str
    strength: float


@dataclass(frozen=True)
class StrikePlan:
    """Sizing for one attempt, valid only for immediate use."""
    loan_amount: int
    premium_amount: int
    fee_rate: int                # maxFeePerGas, wei
    priority_fee: int            # maxPriorityFeePerGas, wei


@dataclass(frozen=True)
class StrikeAction:
    """Contract call payload built from a plan."""
    target: str
    operation: str
    path: tuple[str, ...]
    amount: int
    value: int
    gas_limit: int
    max_fee_per_gas: int
    max_priority_fee_per_gas: int


@dataclass(frozen=True)
class Outcome:
    """Observed result of a submitted action."""
    success: bool
    tx_hash: Optional[str] = None


class AttemptResult(Enum):
    """Stage at which a strike attempt finished."""
    INERT = "inert"
    NO_PLAN = "no_plan"
    UNTRUSTED = "untrusted"
    SIMULATION_REJECTED = "simulation_rejected"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    SUBMISSION_FAILED = "submission_failed"
    SUBMITTED = "submitted"
