# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-06
# Updated: 2026-10-07
# Description: EmbeddingHealth
# -----------------------------------------------------------------------------
import time
import logging
from typing import Any, Optional

from utility.errors import SemanticSearchError
from utility.logging_utils import get_logger


class EmbeddingHealth:
    """
    Smoke test for the embedding provider.

    Verifies:
      - The provider is configured
      - The embedding call completes successfully
      - The vector dimension matches the deployment dimension
    """

    CHECK_TEXT = "TabFlow embedding healthcheck"

    def __init__(self, embedder: Any, logger: Optional[logging.Logger] = None):
        self.embedder = embedder
        self.logger = logger or get_logger(__name__)

    def run(self) -> bool:
        if not self.embedder.is_configured():
            self.logger.warning("Embedding healthcheck skipped: provider not configured.")
            return False

        self.logger.info("Running embedding healthcheck using model: %s", self.embedder.model)
        try:
            start = time.time()
            vec = self.embedder.embed(self.CHECK_TEXT)
            elapsed_ms = (time.time() - start) * 1000.0
        except SemanticSearchError as e:
            self.logger.error("Embedding healthcheck FAILED: %s", e)
            return False

        # embed() already enforces the dimension; log it for the operator
        self.logger.info(
            "Embedding call succeeded in %.1f ms. Returned dimension: %d",
            elapsed_ms,
            len(vec),
        )
        self.logger.info("Embedding healthcheck PASSED.")
        return True
