"""Default configuration parameters for the execution governor."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NetworkParams:
    """Static per-network parameters, in human units."""
    name: str
    chain_id: int
    rpc_url: str
    rpc_env: str                     # Environment variable overriding rpc_url
    safety_margin_eth: str           # Reserve kept untouched, in ether
    priority_fee_gwei: str           # Priority fee hint, in gwei


@dataclass(frozen=True)
class StrikeParams:
    """Strike sizing parameters."""
    gas_budget: int = 2_000_000                  # Fixed gas limit per attempt
    buffer_wei: int = 100_000                    # Flat overhead buffer
    gas_price_markup_pct: int = 120              # Applied to the reported gas price
    fallback_gas_price_gwei: str = "0.01"        # Used when the node reports none
    leverage_numerator: int = 10_000
    leverage_denominator: int = 9
    path: tuple[str, ...] = ("ETH", "USDC", "ETH")
    operation: str = "executeComplexPath"


@dataclass(frozen=True)
class TrustParams:
    """Trust ledger parameters."""
    path: str = "trust_scores.json"
    seeds: dict[str, float] = field(
        default_factory=lambda: {"WEB_AI": 0.85, "DISCOVERY": 0.70}
    )
    default_score: float = 0.5
    floor: float = 0.1
    ceiling: float = 0.99
    reward: float = 1.05                         # Multiplier on success
    penalty: float = 0.90                        # Multiplier on failure
    gate: float = 0.4                            # Scores at or below are rejected


@dataclass(frozen=True)
class SignalParams:
    """External signal acquisition parameters."""
    providers: tuple[str, ...] = (
        "https://api.crypto-ai-signals.com/v1/latest",
        "https://top-trading-ai-blog.com/alerts",
    )
    timeout_seconds: float = 5.0
    strength_threshold: float = 0.1
    ticker_pattern: str = r"\$[A-Z]+"


@dataclass(frozen=True)
class SchedulerParams:
    """Tick loop parameters."""
    tick_interval_seconds: float = 1.0
    confirmations: int = 1
    confirmation_timeout_seconds: float = 120.0
    web_source: str = "WEB_AI"
    fallback_source: str = "DISCOVERY"


@dataclass(frozen=True)
class HealthParams:
    """Liveness endpoint parameters."""
    host: str = "0.0.0.0"
    port: int = 8080
    engine_name: str = "APEX_TITAN"


DEFAULT_NETWORKS: tuple[NetworkParams, ...] = (
    NetworkParams(
        name="ETHEREUM",
        chain_id=1,
        rpc_url="https://eth.llamarpc.com",
        rpc_env="ETH_RPC",
        safety_margin_eth="0.005",
        priority_fee_gwei="500.0",
    ),
    NetworkParams(
        name="BASE",
        chain_id=8453,
        rpc_url="https://mainnet.base.org",
        rpc_env="BASE_RPC",
        safety_margin_eth="0.0035",
        priority_fee_gwei="1.6",
    ),
    NetworkParams(
        name="ARBITRUM",
        chain_id=42161,
        rpc_url="https://arb1.arbitrum.io/rpc",
        rpc_env="ARB_RPC",
        safety_margin_eth="0.002",
        priority_fee_gwei="1.0",
    ),
    NetworkParams(
        name="POLYGON",
        chain_id=137,
        rpc_url="https://polygon-rpc.com",
        rpc_env="POLY_RPC",
        safety_margin_eth="0.001",
        priority_fee_gwei="200.0",
    ),
)


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    networks: tuple[NetworkParams, ...]
    strike: StrikeParams
    trust: TrustParams
    signals: SignalParams
    scheduler: SchedulerParams
    health: HealthParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        networks=DEFAULT_NETWORKS,
        strike=StrikeParams(),
        trust=TrustParams(),
        signals=SignalParams(),
        scheduler=SchedulerParams(),
        health=HealthParams(),
    )
