"""Structured JSON audit log for comparisons and conflict resolutions."""

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from lexicompare.constants import ERROR_TRUNCATION_CHARS
from lexicompare.logging_config import LOG_DATEFMT, LOG_FORMAT

__all__ = ["ComparisonLogger", "LOG_FORMAT", "LOG_DATEFMT"]


class ComparisonLogger:
    """JSON-lines audit logger with request_id correlation."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger("lexicompare.audit")
        self._logger.setLevel(getattr(logging, level.upper()))
        self._logger.propagate = False

        log_file = os.path.abspath(log_dir / "comparisons.log")
        for existing in list(self._logger.handlers):
            if getattr(existing, "baseFilename", None) != log_file:
                self._logger.removeHandler(existing)
                existing.close()

        if not self._logger.handlers:
            handler = logging.FileHandler(log_file)
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def log_comparison(
        self,
        request_id: str,
        source_a: str,
        source_b: str,
        similarity_score: int,
        differences: int,
        conflicts: int,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "comparison",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "source_a": source_a,
                "source_b": source_b,
                "similarity_score": similarity_score,
                "differences": differences,
                "conflicts": conflicts,
                "duration_ms": duration_ms,
            })
        )

    def log_resolution(
        self,
        comparison_id: str,
        conflict_index: int,
        actor_id: int,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "resolution",
                "timestamp": datetime.now(UTC).isoformat(),
                "comparison_id": comparison_id,
                "conflict_index": conflict_index,
                "actor_id": actor_id,
            })
        )

    def log_error(
        self,
        request_id: str,
        component: str,
        error: str,
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "component": component,
                "error": error[:ERROR_TRUNCATION_CHARS],
            })
        )
