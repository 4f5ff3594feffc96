"""Pytest configuration and shared fixtures."""

import asyncio
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from governor_app.config.defaults import SchedulerParams, StrikeParams, TrustParams
from governor_app.errors import ConfirmationError
from governor_app.models.network import FeeData, NetworkConfig
from governor_app.models.strike import StrikeAction
from governor_app.network.base import NetworkCapability
from governor_app.network.registry import NetworkRegistry
from governor_app.persistence.trust_store import TrustLedger
from governor_app.strike.orchestrator import ExecutionOrchestrator
from governor_app.strike.planner import StrikePlanner

SIGNER_ADDRESS = "0x000000000000000000000000000000000000dEaD"
EXECUTOR_ADDRESS = "0x1111111111111111111111111111111111111111"
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

GAS_PRICE = 1_000_000_000        # 1 gwei
PRIORITY_FEE = 2_000_000_000     # 2 gwei
SAFETY_MARGIN = 5_000_000_000_000_000


class FakeCapability(NetworkCapability):
    """In-memory network that records every call."""

    def __init__(
        self,
        config: NetworkConfig,
        balance: int = 0,
        gas_price: Optional[int] = GAS_PRICE,
        read_error: Optional[Exception] = None,
        simulate_error: Optional[Exception] = None,
        submit_error: Optional[Exception] = None,
        confirmation: Any = True,
        confirmation_delay: float = 0.0,
    ):
        super().__init__(config)
        self.balance = balance
        self.gas_price = gas_price
        self.read_error = read_error
        self.simulate_error = simulate_error
        self.submit_error = submit_error
        self.confirmation = confirmation
        self.confirmation_delay = confirmation_delay
        self.calls: list[str] = []
        self.simulated: list[StrikeAction] = []
        self.submitted: list[StrikeAction] = []

    async def get_balance(self, address: str) -> int:
        self.calls.append("get_balance")
        await asyncio.sleep(0)
        if self.read_error:
            raise self.read_error
        return self.balance

    async def get_fee_data(self) -> FeeData:
        self.calls.append("get_fee_data")
        await asyncio.sleep(0)
        if self.read_error:
            raise self.read_error
        return FeeData(gas_price=self.gas_price)

    async def simulate(self, action: StrikeAction) -> None:
        self.calls.append("simulate")
        self.simulated.append(action)
        if self.simulate_error:
            raise self.simulate_error

    async def submit(self, action: StrikeAction) -> str:
        self.calls.append("submit")
        if self.submit_error:
            raise self.submit_error
        self.submitted.append(action)
        return f"0x{len(self.submitted):064x}"

    async def await_confirmation(self, tx_hash: str, confirmations: int = 1,
                                 timeout: float = 120.0) -> bool:
        self.calls.append("await_confirmation")
        if self.confirmation_delay:
            await asyncio.sleep(self.confirmation_delay)
        if isinstance(self.confirmation, Exception):
            raise self.confirmation
        return self.confirmation


def make_config(name: str = "ETHEREUM", chain_id: int = 1) -> NetworkConfig:
    return NetworkConfig(
        name=name,
        chain_id=chain_id,
        rpc_url=f"https://rpc.{name.lower()}.test",
        safety_margin=SAFETY_MARGIN,
        priority_fee_hint=PRIORITY_FEE,
    )


def overhead_for(config: NetworkConfig, gas_price: int = GAS_PRICE,
                 params: StrikeParams = StrikeParams()) -> int:
    fee_rate = gas_price * params.gas_price_markup_pct // 100 + config.priority_fee_hint
    return params.gas_budget * fee_rate + config.safety_margin + params.buffer_wei


def make_registry(capabilities: dict[str, Any], signing: bool = True) -> NetworkRegistry:
    """
    Build a registry from ``{name: FakeCapability | Exception}``.

    Exceptions make the factory fail for that network.
    """
    configs = [
        cap.config if isinstance(cap, NetworkCapability) else make_config(name)
        for name, cap in capabilities.items()
    ]

    def factory(config: NetworkConfig) -> NetworkCapability:
        cap = capabilities[config.name]
        if isinstance(cap, Exception):
            raise cap
        if signing:
            cap.bind_signer(SimpleNamespace(address=SIGNER_ADDRESS))
        return cap

    registry = NetworkRegistry(configs)
    registry.initialize(private_key=None, adapter_factory=factory)
    return registry


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "trust_scores.json"


@pytest.fixture
def ledger(ledger_path) -> TrustLedger:
    return TrustLedger(str(ledger_path))


@pytest.fixture
def fast_scheduler() -> SchedulerParams:
    return SchedulerParams(tick_interval_seconds=0.0, confirmation_timeout_seconds=1.0)


@pytest.fixture
def make_orchestrator(ledger, fast_scheduler):
    def _make(registry: NetworkRegistry, trust_ledger: Optional[TrustLedger] = None) -> ExecutionOrchestrator:
        return ExecutionOrchestrator(
            registry=registry,
            ledger=trust_ledger or ledger,
            planner=StrikePlanner(),
            executor_address=EXECUTOR_ADDRESS,
            trust_params=TrustParams(),
            scheduler_params=fast_scheduler,
        )
    return _make


@pytest.fixture
def confirmation_error() -> ConfirmationError:
    return ConfirmationError("receipt timed out", tx_hash="0xabc")
