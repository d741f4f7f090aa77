# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-10-07
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from health.EmbeddingHealth import EmbeddingHealth
from utility.logging_utils import get_class_logger
from vectorstore.TabVectorStore import TabVectorStore


class TestRunner:
    """
    Orchestrates all smoke tests and reports a consolidated result.

    Tests included:
      - EmbeddingHealth (embedding provider round trip + dimension)
      - DatabaseHealth  (vector store connection)
    """

    __test__ = False  # not a pytest class

    def __init__(self, embedder: Any, store: TabVectorStore, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_class_logger(self.__class__)
        self.embedding_health = EmbeddingHealth(embedder)
        self.store = store

    # -------------------------------------------------------------------------
    def run_all(self, run_embedding: bool = True) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param run_embedding: If False, skips the (billable) embedding check.
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (run_embedding=%s)", run_embedding)

        results: Dict[str, bool] = {}

        ok_db = self.store.test_connection()
        results["database_health"] = ok_db
        self._log_result("DatabaseHealth", ok_db)

        if run_embedding:
            ok_embed = self.embedding_health.run()
            results["embedding_health"] = ok_embed
            self._log_result("EmbeddingHealth", ok_embed)

        passed = sum(1 for ok in results.values() if ok)
        self.logger.info("Smoke test suite complete: %d/%d passed", passed, len(results))
        return results

    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)
