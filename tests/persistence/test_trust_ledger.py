"""Tests for the trust ledger."""

import asyncio
import json
import random
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from governor_app.config.defaults import TrustParams
from governor_app.errors import PersistenceError
from governor_app.persistence.trust_store import TrustLedger


class TestTrustLedgerLoading:
    """Startup state recovery."""

    def test_missing_file_uses_seeds(self, ledger_path):
        """No prior state falls back to the seed map."""
        ledger = TrustLedger(str(ledger_path))
        assert ledger.snapshot() == {"WEB_AI": 0.85, "DISCOVERY": 0.70}

    def test_corrupt_file_uses_seeds(self, ledger_path):
        """Unparseable JSON must not crash startup."""
        ledger_path.write_text("{not json", encoding="utf-8")
        ledger = TrustLedger(str(ledger_path))
        assert ledger.snapshot() == {"WEB_AI": 0.85, "DISCOVERY": 0.70}

    def test_non_mapping_file_uses_seeds(self, ledger_path):
        ledger_path.write_text("[0.5, 0.6]", encoding="utf-8")
        ledger = TrustLedger(str(ledger_path))
        assert ledger.snapshot() == {"WEB_AI": 0.85, "DISCOVERY": 0.70}

    def test_existing_scores_are_loaded(self, ledger_path):
        ledger_path.write_text(json.dumps({"WEB_AI": 0.42, "OTHER": 0.9}), encoding="utf-8")
        ledger = TrustLedger(str(ledger_path))
        assert ledger.get("WEB_AI") == pytest.approx(0.42)
        assert ledger.get("OTHER") == pytest.approx(0.9)
        assert "DISCOVERY" not in ledger.snapshot()

    def test_loaded_scores_are_clamped_and_filtered(self, ledger_path):
        """Out-of-range values are clamped; non-numeric entries dropped."""
        ledger_path.write_text(
            json.dumps({"HIGH": 5.0, "LOW": -1, "BAD": "x", "FLAG": True}),
            encoding="utf-8"
        )
        ledger = TrustLedger(str(ledger_path))
        assert ledger.snapshot() == {"HIGH": 0.99, "LOW": 0.1}


class TestTrustLedgerRule:
    """The exponential learning rule."""

    def test_get_unseen_source_defaults_without_mutation(self, ledger):
        assert ledger.get("NEW_SOURCE") == 0.5
        assert "NEW_SOURCE" not in ledger.snapshot()

    def test_success_update(self, ledger):
        assert ledger.update("WEB_AI", True) == pytest.approx(min(0.99, 0.85 * 1.05))

    def test_failure_update(self, ledger):
        assert ledger.update("DISCOVERY", False) == pytest.approx(max(0.1, 0.70 * 0.90))

    def test_unseen_source_starts_from_default(self, ledger):
        assert ledger.update("NEW_SOURCE", True) == pytest.approx(0.525)
        assert ledger.update("OTHER_SOURCE", False) == pytest.approx(0.45)

    def test_ceiling(self, ledger):
        for _ in range(20):
            score = ledger.update("WEB_AI", True)
        assert score == 0.99

    def test_floor(self, ledger):
        for _ in range(40):
            score = ledger.update("WEB_AI", False)
        assert score == 0.1

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_scores_stay_in_bounds_for_any_sequence(self, ledger_path, seed):
        """Random outcome sequences never leave [0.1, 0.99]."""
        rng = random.Random(seed)
        start = rng.uniform(0.1, 0.99)
        ledger_path.write_text(json.dumps({"S": start}), encoding="utf-8")
        ledger = TrustLedger(str(ledger_path))

        for _ in range(200):
            old = ledger.get("S")
            success = rng.random() < 0.5
            new = ledger.update("S", success)
            expected = min(0.99, old * 1.05) if success else max(0.1, old * 0.90)
            assert new == pytest.approx(expected)
            assert 0.1 <= new <= 0.99


class TestTrustLedgerPersistence:
    """Every update is written through to disk."""

    def test_update_writes_full_map(self, ledger, ledger_path):
        ledger.update("WEB_AI", True)
        on_disk = json.loads(ledger_path.read_text(encoding="utf-8"))
        assert on_disk == ledger.snapshot()
        assert set(on_disk) == {"WEB_AI", "DISCOVERY"}

    def test_state_survives_reload(self, ledger, ledger_path):
        value = ledger.update("NEW_SOURCE", False)
        reloaded = TrustLedger(str(ledger_path))
        assert reloaded.get("NEW_SOURCE") == pytest.approx(value)

    def test_no_temp_files_left_behind(self, ledger, ledger_path):
        for _ in range(5):
            ledger.update("WEB_AI", True)
        assert [p.name for p in ledger_path.parent.iterdir()] == [ledger_path.name]

    def test_write_failure_raises_persistence_error(self, ledger):
        """A failed write surfaces as PersistenceError; memory still holds the new score."""
        with patch("governor_app.persistence.trust_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError) as exc_info:
                ledger.update("WEB_AI", False)

        assert exc_info.value.operation == "write"
        assert ledger.get("WEB_AI") == pytest.approx(0.85 * 0.90)

    def test_custom_params(self, ledger_path):
        params = TrustParams(seeds={"A": 0.6}, reward=1.5, ceiling=0.95)
        ledger = TrustLedger(str(ledger_path), params=params)
        assert ledger.get("A") == 0.6
        assert ledger.update("A", True) == pytest.approx(0.9)
        assert ledger.update("A", True) == 0.95


class TestTrustLedgerConcurrency:
    """Concurrent updates never lose a write."""

    @pytest.mark.asyncio
    async def test_fifty_distinct_sources_from_tasks(self, ledger, ledger_path):
        sources = [f"SRC_{i}" for i in range(50)]

        async def report(source):
            await asyncio.sleep(0)
            return ledger.update(source, True)

        await asyncio.gather(*(report(s) for s in sources))

        snapshot = ledger.snapshot()
        for source in sources:
            assert snapshot[source] == pytest.approx(0.525)
        assert json.loads(ledger_path.read_text(encoding="utf-8")) == snapshot

    def test_fifty_distinct_sources_from_threads(self, ledger, ledger_path):
        sources = [f"SRC_{i}" for i in range(50)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda s: ledger.update(s, True), sources))

        snapshot = ledger.snapshot()
        assert all(snapshot[s] == pytest.approx(0.525) for s in sources)
        assert json.loads(ledger_path.read_text(encoding="utf-8")) == snapshot

    def test_same_source_mixed_outcomes_serialize(self, ledger):
        """Without clamping, every serialization of the calls yields the same product."""
        outcomes = [True, False] * 10

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda ok: ledger.update("SHARED", ok), outcomes))

        assert ledger.get("SHARED") == pytest.approx(0.5 * (1.05 ** 10) * (0.90 ** 10))

    def test_same_source_result_within_transition_bounds(self, ledger_path):
        """Near the ceiling, the result is still a value some serialization produces."""
        ledger_path.write_text(json.dumps({"SHARED": 0.97}), encoding="utf-8")
        ledger = TrustLedger(str(ledger_path))

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda ok: ledger.update("SHARED", ok), [True, False]))

        # success-then-failure or failure-then-success
        candidates = {max(0.1, min(0.99, 0.97 * 1.05) * 0.90), min(0.99, 0.97 * 0.90 * 1.05)}
        assert any(ledger.get("SHARED") == pytest.approx(c) for c in candidates)
