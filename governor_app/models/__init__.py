"""
Data models and contracts module.

Immutable data structures for network configuration, signals, strike plans
and outcomes. Per-tick values are frozen dataclasses and never shared
across ticks.
"""

from .network import FeeData, NetworkConfig
from .strike import AttemptResult, Outcome, Signal, StrikeAction, StrikePlan

__all__ = [
    "AttemptResult",
    "FeeData",
    "NetworkConfig",
    "Outcome",
    "Signal",
    "StrikeAction",
    "StrikePlan",
]
