"""Trust score persistence and the outcome learning rule."""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

import structlog

from ..config.defaults import TrustParams
from ..errors import PersistenceError


class TrustLedger:
    """
    File-backed map from signal source to a trust score.

    All reads and read-modify-write updates go through one lock, and every
    update rewrites the whole file before returning. Scores stay within
    ``[params.floor, params.ceiling]``.
    """

    def __init__(self, path: Optional[str] = None, params: Optional[TrustParams] = None):
        self.params = params or TrustParams()
        self.path = Path(path or self.params.path)
        self.logger = structlog.get_logger("trust.ledger")
        self._lock = threading.Lock()
        self._scores: dict[str, float] = self._load()

    def _seed(self) -> dict[str, float]:
        return dict(self.params.seeds)

    def _clamp(self, value: float) -> float:
        return min(self.params.ceiling, max(self.params.floor, value))

    def _load(self) -> dict[str, float]:
        """Read scores from disk, falling back to the seed map."""
        if not self.path.exists():
            self.logger.info("No trust file, using seed scores", path=str(self.path))
            return self._seed()

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(
                "Trust file unreadable, using seed scores",
                path=str(self.path),
                error=str(e)
            )
            return self._seed()

        if not isinstance(raw, dict):
            self.logger.warning(
                "Trust file is not a mapping, using seed scores",
                path=str(self.path),
                found=type(raw).__name__
            )
            return self._seed()

        scores = {}
        for source, value in raw.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                self.logger.warning("Dropping non-numeric trust entry", source=source, value=value)
                continue
            scores[str(source)] = self._clamp(float(value))

        self.logger.info("Trust scores loaded", path=str(self.path), sources=len(scores))
        return scores

    def _persist(self, scores: dict[str, Any]) -> None:
        """Write the full map atomically (temp file in the same directory, then replace)."""
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".trust-", suffix=".json", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(scores, f)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            self.logger.error("Failed to persist trust scores", path=str(self.path), error=str(e))
            raise PersistenceError(
                f"Failed to write trust scores: {e}",
                operation="write",
                target=str(self.path)
            ) from e

    def get(self, source: str) -> float:
        """Return the score for ``source``, or the default for unseen sources."""
        with self._lock:
            return self._scores.get(source, self.params.default_score)

    def update(self, source: str, success: bool) -> float:
        """
        Apply one observed outcome to ``source`` and persist.

        Args:
            source: Signal source identifier
            success: Whether the submitted action was accepted

        Returns:
            The new score
        """
        with self._lock:
            old = self._scores.get(source, self.params.default_score)
            if success:
                new = min(self.params.ceiling, old * self.params.reward)
            else:
                new = max(self.params.floor, old * self.params.penalty)

            self._scores[source] = new
            self._persist(dict(self._scores))

        self.logger.debug(
            "Trust score updated",
            source=source,
            success=success,
            old_score=round(old, 4),
            new_score=round(new, 4)
        )
        return new

    def snapshot(self) -> dict[str, float]:
        """Return a copy of all stored scores."""
        with self._lock:
            return dict(self._scores)
