"""Network configuration and fee models."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from web3 import Web3

from ..config.defaults import NetworkParams


@dataclass(frozen=True)
class NetworkConfig:
    """Immutable per-network configuration with amounts in wei."""
    name: str
    chain_id: int
    rpc_url: str
    safety_margin: int           # Minimum reserve, wei
    priority_fee_hint: int       # Priority fee per gas, wei

    @classmethod
    def from_params(cls, params: NetworkParams, rpc_url: Optional[str] = None) -> "NetworkConfig":
        """Convert human-unit parameters into a wei-denominated config."""
        return cls(
            name=params.name,
            chain_id=params.chain_id,
            rpc_url=rpc_url or params.rpc_url,
            safety_margin=int(Web3.to_wei(Decimal(str(params.safety_margin_eth)), "ether")),
            priority_fee_hint=int(Web3.to_wei(Decimal(str(params.priority_fee_gwei)), "gwei")),
        )


@dataclass(frozen=True)
class FeeData:
    """Current fee conditions reported by a network."""
    gas_price: Optional[int] = None
