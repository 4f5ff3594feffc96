"""Tests for structured logging helpers."""

from structlog.testing import capture_logs

from governor_app.logging.config import (
    configure_logging,
    get_gating_logger,
    get_logger,
    log_gate_decision,
    log_strike_outcome,
)


class TestLoggingHelpers:

    def test_configure_logging_json(self) -> None:
        """Test that JSON configuration produces a usable logger."""
        configure_logging(level="DEBUG", format_json=True)
        get_logger("test").info("configured", answer=42)

    def test_gate_failure_logged_at_debug(self) -> None:
        """Test that routine gate rejections stay out of warning level."""
        with capture_logs() as logs:
            log_gate_decision(
                get_gating_logger("test"),
                gate_name="trust",
                passed=False,
                network="BASE",
                source="DISCOVERY",
                reason="score 0.3500 at or below gate 0.4",
            )

        assert logs == [{
            "event": "Gate failed",
            "log_level": "debug",
            "gate_name": "trust",
            "gate_result": "FAIL",
            "network": "BASE",
            "source": "DISCOVERY",
            "reason": "score 0.3500 at or below gate 0.4",
            "subsystem": "gating",
            "audit_trail": True,
        }]

    def test_strike_outcome(self) -> None:
        """Test the accepted and failed outcome records."""
        with capture_logs() as logs:
            log_strike_outcome(get_logger("test"), "ETHEREUM", "WEB_AI", True, 0.89251, "0xabc")
            log_strike_outcome(get_logger("test"), "ETHEREUM", "WEB_AI", False, 0.765)

        assert [entry["outcome"] for entry in logs] == ["ACCEPTED", "FAILED"]
        assert [entry["log_level"] for entry in logs] == ["info", "warning"]
        assert logs[0]["trust_score"] == 0.8925
        assert logs[1]["tx_hash"] is None
