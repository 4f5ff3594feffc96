"""
Strike execution.

Runs one attempt through its gates (session, plan, trust), simulates it,
submits it, and hands the confirmation wait to a background task that feeds
the outcome to the trust ledger. Nothing that happens before a successful
submission is ever scored against a source.
"""

import asyncio
from typing import Optional

import structlog

from ..config.defaults import SchedulerParams, StrikeParams, TrustParams
from ..errors import (
    ConfirmationError,
    InsufficientFundsError,
    PersistenceError,
    SimulationRejectedError,
    SubmissionError,
)
from ..logging.config import (
    get_gating_logger,
    get_strike_logger,
    log_gate_decision,
    log_strike_outcome,
)
from ..models.strike import AttemptResult, Outcome, StrikeAction, StrikePlan
from ..network.registry import NetworkRegistry, NetworkSession
from ..persistence.trust_store import TrustLedger
from .planner import StrikePlanner

logger = structlog.get_logger(__name__)
gating_logger = get_gating_logger(__name__)
strike_logger = get_strike_logger(__name__)


class ExecutionOrchestrator:
    """Gate, simulate, submit and learn for one (network, ticker, source) attempt."""

    def __init__(
        self,
        registry: NetworkRegistry,
        ledger: TrustLedger,
        planner: StrikePlanner,
        executor_address: str,
        strike_params: Optional[StrikeParams] = None,
        trust_params: Optional[TrustParams] = None,
        scheduler_params: Optional[SchedulerParams] = None
    ) -> None:
        self.registry = registry
        self.ledger = ledger
        self.planner = planner
        self.executor_address = executor_address
        self.strike_params = strike_params or planner.params
        self.trust_params = trust_params or ledger.params
        self.scheduler_params = scheduler_params or SchedulerParams()
        self.logger = logger
        self._confirmations: set[asyncio.Task] = set()

    def build_action(self, plan: StrikePlan) -> StrikeAction:
        """Fixed-shape executor call carrying the premium as value."""
        return StrikeAction(
            target=self.executor_address,
            operation=self.strike_params.operation,
            path=tuple(self.strike_params.path),
            amount=plan.loan_amount,
            value=plan.premium_amount,
            gas_limit=self.strike_params.gas_budget,
            max_fee_per_gas=plan.fee_rate,
            max_priority_fee_per_gas=plan.priority_fee,
        )

    def is_trusted(self, score: float) -> bool:
        """Scores at or below the gate never trigger execution."""
        return score > self.trust_params.gate

    async def attempt(self, network: str, ticker: str, source: str) -> AttemptResult:
        """
        Run one strike attempt.

        Args:
            network: Network name
            ticker: Ticker from the triggering signal (informational)
            source: Signal source identifier the outcome is scored under

        Returns:
            The stage at which the attempt finished
        """
        session = self.registry.get_session(network)
        if session is None or not session.can_sign:
            return AttemptResult.INERT

        plan = await self.planner.plan(session)
        if plan is None:
            return AttemptResult.NO_PLAN

        # Locked read; does not wait for in-flight confirmations on the same source.
        score = self.ledger.get(source)
        if not self.is_trusted(score):
            log_gate_decision(
                gating_logger,
                gate_name="trust",
                passed=False,
                network=network,
                source=source,
                reason=f"trust {score:.4f} <= gate {self.trust_params.gate}",
            )
            return AttemptResult.UNTRUSTED

        action = self.build_action(plan)
        capability = session.capability

        strike_logger.info(
            "Striking",
            network=network,
            ticker=ticker,
            source=source,
            trust_score=round(score, 4),
            loan=plan.loan_amount,
            premium=plan.premium_amount
        )

        try:
            await capability.simulate(action)
        except SimulationRejectedError as e:
            self.logger.debug(
                "Strike simulation rejected",
                network=network,
                ticker=ticker,
                reason=e.reason
            )
            return AttemptResult.SIMULATION_REJECTED

        try:
            tx_hash = await capability.submit(action)
        except InsufficientFundsError:
            return AttemptResult.INSUFFICIENT_FUNDS
        except SubmissionError as e:
            self.logger.warning(
                "Strike aborted",
                network=network,
                ticker=ticker,
                error=str(e)
            )
            return AttemptResult.SUBMISSION_FAILED

        strike_logger.info("Strike submitted", network=network, ticker=ticker, tx_hash=tx_hash)

        task = asyncio.create_task(self.verify_and_learn(session, tx_hash, source))
        self._confirmations.add(task)
        task.add_done_callback(self._confirmations.discard)

        return AttemptResult.SUBMITTED

    async def verify_and_learn(self, session: NetworkSession, tx_hash: str, source: str) -> Outcome:
        """Await confirmation and feed the outcome to the trust ledger."""
        try:
            accepted = await session.capability.await_confirmation(
                tx_hash,
                confirmations=self.scheduler_params.confirmations,
                timeout=self.scheduler_params.confirmation_timeout_seconds
            )
        except ConfirmationError as e:
            self.logger.warning(
                "Confirmation failed, scoring as failure",
                network=session.name,
                tx_hash=tx_hash,
                error=str(e)
            )
            accepted = False
        except Exception as e:
            self.logger.warning(
                "Unexpected confirmation error, scoring as failure",
                network=session.name,
                tx_hash=tx_hash,
                error=str(e),
                error_type=type(e).__name__
            )
            accepted = False

        outcome = Outcome(success=bool(accepted), tx_hash=tx_hash)

        try:
            new_score = self.ledger.update(source, outcome.success)
        except PersistenceError:
            new_score = self.ledger.get(source)

        log_strike_outcome(
            strike_logger,
            network=session.name,
            source=source,
            success=outcome.success,
            trust_score=new_score,
            tx_hash=tx_hash
        )
        return outcome

    @property
    def pending_confirmations(self) -> int:
        """Number of confirmation waits still in flight."""
        return len(self._confirmations)

    async def drain(self) -> None:
        """Wait for every in-flight confirmation to settle."""
        while self._confirmations:
            await asyncio.gather(*list(self._confirmations), return_exceptions=True)
