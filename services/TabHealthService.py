# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-10-18
# Description: TabHealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any

from api.schemas.health import (
    AiHealthResponse,
    DeepHealthResponse,
    SmokeTestSummary,
)
from health.TestRunner import TestRunner


@dataclass
class TabHealthService:
    """
    Wraps TestRunner, which runs smoke tests against the embedding
    provider and the database, and reports embedding configuration.
    Returns response models for the API layer.
    """

    test_runner: TestRunner
    embedder: Any

    def ai(self) -> AiHealthResponse:
        if self.embedder.is_configured():
            return AiHealthResponse(status="ok", model=self.embedder.model)
        return AiHealthResponse(status="error", message="Embedding API not configured")

    def deep_health(self, run_embedding: bool = True) -> DeepHealthResponse:

        results = self.test_runner.run_all(run_embedding=run_embedding)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        overall_status = "ok" if failed == 0 else "error"

        summary = SmokeTestSummary(
            total=total,
            passed=passed,
            failed=failed,
        )

        return DeepHealthResponse(
            status=overall_status,
            results=results,
            summary=summary,
        )
