"""Base class for signal sources."""

from abc import ABC, abstractmethod

import structlog

from ..models.strike import Signal


class BaseSignalSource(ABC):
    """
    Producer of the signals that drive one tick.

    ``collect`` must never raise: a failing provider contributes no signals
    and an empty list means "no external signal this tick".
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"signal.source.{name}")

    @abstractmethod
    async def collect(self) -> list[Signal]:
        """Return this tick's signals, possibly empty."""


class StaticSignalSource(BaseSignalSource):
    """Emits a fixed list of signals every tick."""

    def __init__(self, signals: list[Signal], name: str = "static"):
        super().__init__(name)
        self.signals = list(signals)

    async def collect(self) -> list[Signal]:
        return list(self.signals)
