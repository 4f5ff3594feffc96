"""
Main governor loop.

Drives the tick loop: collect signals, fan out one strike attempt per
network × signal, join them with all-settle semantics, sleep, repeat.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Union

import structlog

from .config.loader import GovernorConfig
from .errors import PreconditionError
from .models.strike import AttemptResult, Signal
from .network.registry import NetworkRegistry
from .persistence.trust_store import TrustLedger
from .signals.base import BaseSignalSource
from .signals.http_source import HttpSignalSource
from .strike.orchestrator import ExecutionOrchestrator
from .strike.planner import StrikePlanner

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScheduledAttempt:
    """One attempt dispatched during a tick."""
    network: str
    ticker: str
    source: str


@dataclass
class TickReport:
    """What a tick scheduled and how each attempt settled."""
    tick: int
    signals: list[Signal]
    attempts: list[ScheduledAttempt] = field(default_factory=list)
    results: list[Union[AttemptResult, BaseException]] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for r in self.results if isinstance(r, BaseException))

    def count(self, result: AttemptResult) -> int:
        return sum(1 for r in self.results if r is result)


class GovernorEngine:
    """
    Multi-network scheduler.

    Every tick is a batch of independent attempts. One attempt raising never
    cancels or delays its siblings, and confirmation waits started by an
    attempt outlive the tick.
    """

    def __init__(
        self,
        config: GovernorConfig,
        registry: NetworkRegistry,
        ledger: TrustLedger,
        signal_source: BaseSignalSource,
        orchestrator: Optional[ExecutionOrchestrator] = None
    ) -> None:
        self.config = config
        self.registry = registry
        self.ledger = ledger
        self.signal_source = signal_source
        self.orchestrator = orchestrator or ExecutionOrchestrator(
            registry=registry,
            ledger=ledger,
            planner=StrikePlanner(config.strike),
            executor_address=config.executor_address or "",
            strike_params=config.strike,
            trust_params=config.trust,
            scheduler_params=config.scheduler,
        )
        self.scheduler = config.scheduler
        self.logger = logger
        self.ticks = 0

    @classmethod
    def from_config(
        cls,
        config: GovernorConfig,
        signal_source: Optional[BaseSignalSource] = None
    ) -> "GovernorEngine":
        """Wire up the registry, ledger and signal source from configuration."""
        registry = NetworkRegistry.create(config.networks, private_key=config.private_key)
        ledger = TrustLedger(params=config.trust)
        return cls(
            config=config,
            registry=registry,
            ledger=ledger,
            signal_source=signal_source or HttpSignalSource(config.signals),
        )

    def check_preconditions(self) -> None:
        """Raise ``PreconditionError`` if the signing key or executor is missing."""
        missing = []
        if not self.config.private_key:
            missing.append("PRIVATE_KEY")
        if not self.config.executor_address:
            missing.append("EXECUTOR_ADDRESS")

        if missing:
            raise PreconditionError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing
            )

    def schedule(self, signals: list[Signal]) -> list[ScheduledAttempt]:
        """Expand one tick's signals into attempts, in network configuration order."""
        attempts = []
        for network in self.registry.network_names():
            if signals:
                for signal in signals:
                    attempts.append(ScheduledAttempt(
                        network=network,
                        ticker=signal.ticker,
                        source=self.scheduler.web_source
                    ))
            else:
                attempts.append(ScheduledAttempt(
                    network=network,
                    ticker=self.scheduler.fallback_source,
                    source=self.scheduler.fallback_source
                ))
        return attempts

    async def run_tick(self) -> TickReport:
        """Run one tick and wait for all of its attempts to settle."""
        self.ticks += 1

        try:
            signals = await self.signal_source.collect()
        except Exception as e:
            self.logger.warning("Signal source failed, continuing without signals", error=str(e))
            signals = []

        report = TickReport(tick=self.ticks, signals=signals, attempts=self.schedule(signals))

        if report.attempts:
            report.results = await asyncio.gather(
                *(self.orchestrator.attempt(a.network, a.ticker, a.source) for a in report.attempts),
                return_exceptions=True
            )

        for attempt, result in zip(report.attempts, report.results):
            if isinstance(result, BaseException):
                self.logger.error(
                    "Strike attempt raised",
                    network=attempt.network,
                    ticker=attempt.ticker,
                    source=attempt.source,
                    error=str(result),
                    error_type=type(result).__name__
                )

        self.logger.debug(
            "Tick settled",
            tick=report.tick,
            signals=len(signals),
            attempts=len(report.attempts),
            submitted=report.count(AttemptResult.SUBMITTED),
            failures=report.failures,
            pending_confirmations=self.orchestrator.pending_confirmations
        )
        return report

    async def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Run the tick loop.

        Returns immediately if preconditions are missing. Otherwise loops
        forever, or for ``max_ticks`` ticks when given.
        """
        try:
            self.check_preconditions()
        except PreconditionError as e:
            self.logger.critical("Governor not started", error=str(e), missing=e.missing)
            return

        self.logger.info(
            "Governor loop starting",
            networks=self.registry.network_names(),
            tick_interval_seconds=self.scheduler.tick_interval_seconds
        )

        while max_ticks is None or self.ticks < max_ticks:
            await self.run_tick()
            if self.ticks == max_ticks:
                break
            await asyncio.sleep(self.scheduler.tick_interval_seconds)

    async def shutdown(self) -> None:
        """Let in-flight confirmations finish so their outcomes are learned."""
        pending = self.orchestrator.pending_confirmations
        if pending:
            self.logger.info("Draining confirmations", pending=pending)
        await self.orchestrator.drain()
