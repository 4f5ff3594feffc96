"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from .loader import GovernorConfig


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates resolved configuration."""

    @staticmethod
    def validate_networks(config: GovernorConfig) -> list[ValidationError]:
        """Validate per-network parameters."""
        errors = []
        seen = set()

        for network in config.networks:
            prefix = f"networks.{network.name}"

            if network.name in seen:
                errors.append(ValidationError(
                    field=prefix,
                    message="Duplicate network name",
                    value=network.name
                ))
            seen.add(network.name)

            if not isinstance(network.chain_id, int) or network.chain_id <= 0:
                errors.append(ValidationError(
                    field=f"{prefix}.chain_id",
                    message="Must be a positive integer",
                    value=network.chain_id
                ))

            parsed = urlparse(network.rpc_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(ValidationError(
                    field=f"{prefix}.rpc_url",
                    message="Must be an http(s) URL",
                    value=network.rpc_url
                ))

            if network.safety_margin < 0:
                errors.append(ValidationError(
                    field=f"{prefix}.safety_margin_eth",
                    message="Must be a non-negative amount",
                    value=network.safety_margin
                ))

            if network.priority_fee_hint < 0:
                errors.append(ValidationError(
                    field=f"{prefix}.priority_fee_gwei",
                    message="Must be a non-negative amount",
                    value=network.priority_fee_hint
                ))

        return errors

    @staticmethod
    def validate_trust(config: GovernorConfig) -> list[ValidationError]:
        """Validate trust ledger parameters."""
        errors = []
        trust = config.trust

        if not 0 < trust.floor < trust.ceiling < 1:
            errors.append(ValidationError(
                field="trust.floor",
                message="Must satisfy 0 < floor < ceiling < 1",
                value=(trust.floor, trust.ceiling)
            ))

        if not trust.floor <= trust.default_score <= trust.ceiling:
            errors.append(ValidationError(
                field="trust.default_score",
                message="Must lie within [floor, ceiling]",
                value=trust.default_score
            ))

        if trust.reward <= 1:
            errors.append(ValidationError(
                field="trust.reward",
                message="Must be greater than 1",
                value=trust.reward
            ))

        if not 0 < trust.penalty < 1:
            errors.append(ValidationError(
                field="trust.penalty",
                message="Must be between 0 and 1",
                value=trust.penalty
            ))

        for source, score in trust.seeds.items():
            if not isinstance(score, (int, float)) or not trust.floor <= score <= trust.ceiling:
                errors.append(ValidationError(
                    field=f"trust.seeds.{source}",
                    message="Must lie within [floor, ceiling]",
                    value=score
                ))

        return errors

    @staticmethod
    def validate_strike(config: GovernorConfig) -> list[ValidationError]:
        """Validate strike sizing parameters."""
        errors = []
        strike = config.strike

        for name in ("gas_budget", "leverage_numerator", "leverage_denominator"):
            value = getattr(strike, name)
            if not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field=f"strike.{name}",
                    message="Must be a positive integer",
                    value=value
                ))

        if strike.gas_price_markup_pct < 100:
            errors.append(ValidationError(
                field="strike.gas_price_markup_pct",
                message="Must be at least 100",
                value=strike.gas_price_markup_pct
            ))

        return errors

    @staticmethod
    def validate_signals(config: GovernorConfig) -> list[ValidationError]:
        """Validate signal acquisition parameters."""
        errors = []

        if config.signals.timeout_seconds <= 0:
            errors.append(ValidationError(
                field="signals.timeout_seconds",
                message="Must be a positive number",
                value=config.signals.timeout_seconds
            ))

        if config.signals.strength_threshold <= 0:
            errors.append(ValidationError(
                field="signals.strength_threshold",
                message="Must be a positive number",
                value=config.signals.strength_threshold
            ))

        return errors

    @staticmethod
    def validate_config(config: GovernorConfig) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        errors.extend(ConfigValidator.validate_networks(config))
        errors.extend(ConfigValidator.validate_trust(config))
        errors.extend(ConfigValidator.validate_strike(config))
        errors.extend(ConfigValidator.validate_signals(config))
        return errors
