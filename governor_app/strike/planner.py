"""
Strike sizing.

Computes how large a bounded strike a network's account can fund right now.
Insufficient headroom is the common case and is not an error.
"""

import asyncio
from decimal import Decimal
from typing import Optional

import structlog
from web3 import Web3

from ..config.defaults import StrikeParams
from ..models.network import FeeData
from ..models.strike import StrikePlan
from ..network.registry import NetworkSession

logger = structlog.get_logger(__name__)


class StrikePlanner:
    """Turns a network's balance and fee conditions into a ``StrikePlan``."""

    def __init__(self, params: Optional[StrikeParams] = None):
        self.params = params or StrikeParams()
        self.fallback_gas_price = int(
            Web3.to_wei(Decimal(self.params.fallback_gas_price_gwei), "gwei")
        )
        self.logger = logger

    def effective_fee(self, fee_data: FeeData, priority_fee_hint: int) -> int:
        """Marked-up gas price plus the network's priority fee hint."""
        gas_price = fee_data.gas_price or self.fallback_gas_price
        return gas_price * self.params.gas_price_markup_pct // 100 + priority_fee_hint

    def overhead(self, fee_rate: int, safety_margin: int) -> int:
        """Fixed per-attempt cost that must stay in the account."""
        return self.params.gas_budget * fee_rate + safety_margin + self.params.buffer_wei

    def size(self, balance: int, fee_data: FeeData, safety_margin: int,
             priority_fee_hint: int) -> Optional[StrikePlan]:
        """
        Size a strike from already-observed account state.

        Returns None when the balance does not strictly exceed the overhead.
        """
        fee_rate = self.effective_fee(fee_data, priority_fee_hint)
        overhead = self.overhead(fee_rate, safety_margin)

        if balance <= overhead:
            return None

        premium = balance - overhead
        loan = premium * self.params.leverage_numerator // self.params.leverage_denominator

        return StrikePlan(
            loan_amount=loan,
            premium_amount=premium,
            fee_rate=fee_rate,
            priority_fee=priority_fee_hint,
        )

    async def plan(self, session: Optional[NetworkSession]) -> Optional[StrikePlan]:
        """Read balance and fees concurrently, then size; any read failure yields None."""
        if session is None or not session.can_sign:
            return None

        capability = session.capability
        config = session.config

        try:
            balance, fee_data = await asyncio.gather(
                capability.get_balance(session.address),
                capability.get_fee_data()
            )
        except Exception as e:
            self.logger.debug(
                "Planning skipped, network read failed",
                network=config.name,
                error=str(e),
                error_type=type(e).__name__
            )
            return None

        plan = self.size(balance, fee_data, config.safety_margin, config.priority_fee_hint)

        if plan is None:
            overhead = self.overhead(
                self.effective_fee(fee_data, config.priority_fee_hint),
                config.safety_margin
            )
            self.logger.debug(
                "Planning skipped, insufficient headroom",
                network=config.name,
                shortfall_eth=str(Web3.from_wei(overhead - balance, "ether"))
            )

        return plan
