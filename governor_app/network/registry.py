"""
Network registry.

Holds one session per configured network for the lifetime of the process.
Sessions are built once at startup and only read afterwards, so they are
shared across concurrent attempts without locking.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import structlog
from eth_account import Account

from ..errors import NetworkInitError
from ..models.network import NetworkConfig
from .base import NetworkCapability
from .web3_adapter import Web3NetworkAdapter

logger = structlog.get_logger(__name__)

MIN_PRIVATE_KEY_LENGTH = 64

AdapterFactory = Callable[[NetworkConfig], NetworkCapability]


@dataclass(frozen=True)
class NetworkSession:
    """An established connection plus, optionally, a bound signing identity."""
    config: NetworkConfig
    capability: NetworkCapability

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def address(self) -> Optional[str]:
        return self.capability.address

    @property
    def can_sign(self) -> bool:
        """Read-only sessions are excluded from strike attempts."""
        return self.capability.address is not None


class NetworkRegistry:
    """Per-network sessions, isolated so one failing network never blocks another."""

    def __init__(self, configs: Iterable[NetworkConfig]):
        self.configs: dict[str, NetworkConfig] = {c.name: c for c in configs}
        self.sessions: dict[str, NetworkSession] = {}
        self.unavailable: dict[str, str] = {}
        self.logger = logger

    @classmethod
    def create(
        cls,
        configs: Iterable[NetworkConfig],
        private_key: Optional[str] = None,
        adapter_factory: AdapterFactory = Web3NetworkAdapter.connect
    ) -> "NetworkRegistry":
        """Build a registry and initialize every configured network."""
        registry = cls(configs)
        registry.initialize(private_key, adapter_factory)
        return registry

    def initialize(
        self,
        private_key: Optional[str],
        adapter_factory: AdapterFactory
    ) -> None:
        """Establish a session for each network, recording failures."""
        for name, config in self.configs.items():
            try:
                self.sessions[name] = self._establish(config, private_key, adapter_factory)
            except Exception as e:
                error = e if isinstance(e, NetworkInitError) else NetworkInitError(
                    str(e), network=name, rpc_url=config.rpc_url
                )
                self.unavailable[name] = str(error)
                self.logger.error(
                    "Network initialization failed",
                    network=name,
                    rpc_url=config.rpc_url,
                    error=str(error),
                    error_type=type(e).__name__
                )

        self.logger.info(
            "Network registry initialized",
            live=[n for n, s in self.sessions.items() if s.can_sign],
            read_only=[n for n, s in self.sessions.items() if not s.can_sign],
            unavailable=list(self.unavailable)
        )

    def _establish(
        self,
        config: NetworkConfig,
        private_key: Optional[str],
        adapter_factory: AdapterFactory
    ) -> NetworkSession:
        capability = adapter_factory(config)

        if private_key and len(private_key) >= MIN_PRIVATE_KEY_LENGTH:
            capability.bind_signer(Account.from_key(private_key))
        else:
            self.logger.warning(
                "No valid signing key, network is read-only",
                network=config.name
            )

        return NetworkSession(config=config, capability=capability)

    def get_session(self, name: str) -> Optional[NetworkSession]:
        """Return the session for ``name``, or None if uninitialized or failed."""
        return self.sessions.get(name)

    def network_names(self) -> list[str]:
        """All configured network names, in configuration order."""
        return list(self.configs)
