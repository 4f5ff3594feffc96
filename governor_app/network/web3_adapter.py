"""EVM network adapter backed by web3's asyncio client."""

import asyncio
from typing import Any, Optional

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from ..errors import (
    ConfirmationError,
    InsufficientFundsError,
    PlanningError,
    SimulationRejectedError,
    SubmissionError,
    is_insufficient_funds,
)
from ..models.network import FeeData, NetworkConfig
from ..models.strike import StrikeAction
from .base import NetworkCapability

EXECUTOR_ABI = [
    {
        "type": "function",
        "name": "executeComplexPath",
        "stateMutability": "payable",
        "inputs": [
            {"name": "path", "type": "string[]"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [],
    }
]

REQUEST_KWARGS = {"timeout": 10}
RECEIPT_POLL_SECONDS = 1.0


class Web3NetworkAdapter(NetworkCapability):
    """Network capability over JSON-RPC using ``AsyncWeb3``."""

    def __init__(self, config: NetworkConfig, w3: AsyncWeb3):
        super().__init__(config)
        self.w3 = w3

    @classmethod
    def connect(cls, config: NetworkConfig) -> "Web3NetworkAdapter":
        """
        Build an adapter for ``config``.

        The provider opens connections lazily, so this never blocks; the
        chain id comes from configuration rather than an RPC round trip.
        """
        provider = AsyncHTTPProvider(config.rpc_url, request_kwargs=REQUEST_KWARGS)
        return cls(config, AsyncWeb3(provider))

    async def get_balance(self, address: str) -> int:
        try:
            return int(await self.w3.eth.get_balance(Web3.to_checksum_address(address)))
        except Exception as e:
            raise PlanningError(f"Balance read failed: {e}", network=self.name) from e

    async def get_fee_data(self) -> FeeData:
        try:
            gas_price = await self.w3.eth.gas_price
        except Exception as e:
            raise PlanningError(f"Fee read failed: {e}", network=self.name) from e
        return FeeData(gas_price=int(gas_price) if gas_price else None)

    async def simulate(self, action: StrikeAction) -> None:
        try:
            tx = await self._build_transaction(action)
            await self.w3.eth.call(tx)
        except Exception as e:
            raise SimulationRejectedError(
                "Simulation reverted",
                reason=str(e),
                network=self.name
            ) from e

    async def submit(self, action: StrikeAction) -> str:
        if self._signer is None:
            raise SubmissionError("No signing identity bound", network=self.name)

        try:
            tx = await self._build_transaction(action)
            signed = self._signer.sign_transaction(tx)
            raw = getattr(signed, "raw_transaction", None) or getattr(signed, "rawTransaction")
            tx_hash = await self.w3.eth.send_raw_transaction(raw)
        except Exception as e:
            if is_insufficient_funds(e):
                raise InsufficientFundsError(str(e), network=self.name) from e
            raise SubmissionError(f"Broadcast failed: {e}", network=self.name) from e

        return self.w3.to_hex(tx_hash)

    async def await_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = 120.0
    ) -> bool:
        try:
            return await asyncio.wait_for(
                self._wait_for_confirmations(tx_hash, confirmations, timeout),
                timeout=timeout
            )
        except Exception as e:
            raise ConfirmationError(
                f"Confirmation wait failed: {e!r}",
                tx_hash=tx_hash
            ) from e

    async def _wait_for_confirmations(self, tx_hash: str, confirmations: int, timeout: float) -> bool:
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=timeout,
            poll_latency=RECEIPT_POLL_SECONDS
        )

        target_block = receipt["blockNumber"] + max(confirmations, 1) - 1
        while await self.w3.eth.block_number < target_block:
            await asyncio.sleep(RECEIPT_POLL_SECONDS)

        return receipt.get("status") == 1

    async def _build_transaction(self, action: StrikeAction) -> dict[str, Any]:
        """Encode the executor call with the plan's fee parameters."""
        sender = self.address
        if sender is None:
            raise SubmissionError("No signing identity bound", network=self.name)

        nonce = await self.w3.eth.get_transaction_count(sender, "pending")
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(action.target),
            abi=EXECUTOR_ABI
        )
        call = getattr(contract.functions, action.operation)(list(action.path), action.amount)
        return await call.build_transaction({
            "from": sender,
            "chainId": self.config.chain_id,
            "value": action.value,
            "gas": action.gas_limit,
            "maxFeePerGas": action.max_fee_per_gas,
            "maxPriorityFeePerGas": action.max_priority_fee_per_gas,
            "nonce": nonce,
        })

    def __repr__(self) -> str:
        signer: Optional[str] = self.address
        return f"Web3NetworkAdapter(name={self.name!r}, chain_id={self.config.chain_id}, signer={signer!r})"
