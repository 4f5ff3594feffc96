"""Base class for network capability adapters."""

from abc import ABC, abstractmethod
from typing import Any, Optional

import structlog

from ..models.network import FeeData, NetworkConfig
from ..models.strike import StrikeAction


class NetworkCapability(ABC):
    """
    The narrow surface the governor uses to act against one network.

    Implementations translate transport failures into the governor's error
    hierarchy: ``PlanningError`` for reads, ``SimulationRejectedError`` for
    simulation, ``SubmissionError``/``InsufficientFundsError`` for submission
    and ``ConfirmationError`` for confirmation waits.
    """

    def __init__(self, config: NetworkConfig):
        self.config = config
        self.name = config.name
        self.logger = structlog.get_logger(f"network.{config.name.lower()}")
        self._signer: Optional[Any] = None

    @property
    def address(self) -> Optional[str]:
        """Address of the bound signing identity, if any."""
        return self._signer.address if self._signer is not None else None

    def bind_signer(self, account: Any) -> None:
        """Bind a signing identity (an eth-account ``LocalAccount``)."""
        self._signer = account

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """Return the balance of ``address`` in wei."""

    @abstractmethod
    async def get_fee_data(self) -> FeeData:
        """Return current fee conditions."""

    @abstractmethod
    async def simulate(self, action: StrikeAction) -> None:
        """Dry-run the action; raise ``SimulationRejectedError`` on revert."""

    @abstractmethod
    async def submit(self, action: StrikeAction) -> str:
        """Sign and broadcast the action, returning its transaction hash."""

    @abstractmethod
    async def await_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = 120.0
    ) -> bool:
        """Wait for ``confirmations`` and return whether the action was accepted."""
