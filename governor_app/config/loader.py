"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..models.network import NetworkConfig
from .defaults import (
    DefaultConfig,
    HealthParams,
    NetworkParams,
    SchedulerParams,
    SignalParams,
    StrikeParams,
    TrustParams,
    get_default_config,
)


@dataclass(frozen=True)
class GovernorConfig:
    """Fully resolved runtime configuration."""
    networks: tuple[NetworkConfig, ...]
    strike: StrikeParams
    trust: TrustParams
    signals: SignalParams
    scheduler: SchedulerParams
    health: HealthParams
    private_key: Optional[str] = None
    executor_address: Optional[str] = None
    log_level: str = "INFO"

    @property
    def keys_detected(self) -> bool:
        """Whether both signing key and executor address are configured."""
        return bool(self.private_key and self.executor_address)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from governor.yaml, if present."""
        config_file = self.config_dir / "governor.yaml"

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def load(self, env: Optional[Mapping[str, str]] = None) -> GovernorConfig:
        """
        Resolve configuration with 3-tier precedence.

        Priority order:
        1. Environment variables (highest priority)
        2. governor.yaml in the config directory
        3. Built-in defaults (lowest priority)
        """
        if env is None:
            env = os.environ

        file_config = self.load_file_config()

        strike = self._apply(self.defaults.strike, file_config.get("strike"))
        trust = self._apply(self.defaults.trust, file_config.get("trust"))
        signals = self._apply(self.defaults.signals, file_config.get("signals"))
        scheduler = self._apply(self.defaults.scheduler, file_config.get("scheduler"))
        health = self._apply(self.defaults.health, file_config.get("health"))

        if env.get("TRUST_FILE"):
            trust = replace(trust, path=env["TRUST_FILE"])
        if env.get("PORT"):
            health = replace(health, port=int(env["PORT"]))

        networks = tuple(
            NetworkConfig.from_params(params, rpc_url=env.get(params.rpc_env) or None)
            for params in self._merge_networks(file_config.get("networks"))
        )

        return GovernorConfig(
            networks=networks,
            strike=strike,
            trust=trust,
            signals=signals,
            scheduler=scheduler,
            health=health,
            private_key=env.get("PRIVATE_KEY") or None,
            executor_address=env.get("EXECUTOR_ADDRESS") or None,
            log_level=env.get("LOG_LEVEL") or file_config.get("log_level", "INFO"),
        )

    def _merge_networks(self, overrides: Optional[dict[str, Any]]) -> list[NetworkParams]:
        """Apply per-network overrides; unknown names add new networks."""
        merged = {params.name: params for params in self.defaults.networks}

        for name, values in (overrides or {}).items():
            values = dict(values or {})
            if values.pop("enabled", True) is False:
                merged.pop(name, None)
                continue
            if name in merged:
                merged[name] = self._apply(merged[name], values)
            else:
                values.setdefault("rpc_env", f"{name}_RPC")
                merged[name] = NetworkParams(name=name, **values)

        return list(merged.values())

    def _apply(self, params: Any, overrides: Optional[dict[str, Any]]) -> Any:
        """Return a copy of a params dataclass with known fields overridden."""
        if not overrides:
            return params

        known = {f.name: f for f in fields(params)}
        values = {}
        for key, value in overrides.items():
            if key not in known:
                continue
            if isinstance(getattr(params, key), tuple) and isinstance(value, list):
                value = tuple(value)
            values[key] = value

        return replace(params, **values)
