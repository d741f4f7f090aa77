# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-10-04
# Description: TabEmbedder
# -----------------------------------------------------------------------------
import threading
from typing import Optional, Any

import numpy as np
import openai
from openai import OpenAI

from config.Config import Config
from utility.errors import ProviderError, ProviderUnavailable
from utility.logging_utils import get_class_logger

PAGE_TEXT_SEPARATOR = " | "


class TabEmbedder:
    """
    Turns page text into a float32 vector of fixed dimension via an
    OpenAI-compatible embeddings endpoint (Gemini by default).

    One attempt per call: the client is built with max_retries=0 and nothing
    is cached here. Callers decide whether to retry.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            dimensions: int = 768,
            send_dimensions: bool = True,
            timeout: float = 30.0,
            client: Any = None,
            logger=None,
    ):
        self.cfg = cfg
        self.model = cfg.embedding_model
        self.dimensions = dimensions
        self.send_dimensions = send_dimensions
        self.timeout = timeout
        self.logger = logger or get_class_logger(self.__class__)

        # Created lazily so an unconfigured key only fails the calls that need it
        self._client = client
        self._client_lock = threading.Lock()

        self.logger.info(
            "TabEmbedder initialized model='%s' dim=%d configured=%s",
            self.model,
            self.dimensions,
            self.is_configured(),
        )

    @staticmethod
    def compose_page_text(title: Optional[str], url: Optional[str], summary: Optional[str] = None) -> str:
        """Join the available page signals (title, url, summary) in that order."""
        parts = [p for p in (title, url, summary) if p]
        return PAGE_TEXT_SEPARATOR.join(parts)

    def is_configured(self) -> bool:
        return self._client is not None or bool(self.cfg.embedding_api_key)

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client

        if not self.cfg.embedding_api_key:
            raise ProviderUnavailable(
                f"Embedding provider not configured: set {Config.ENV_VARS['embedding_api_key']}"
            )

        with self._client_lock:
            if self._client is None:
                self._client = OpenAI(
                    api_key=self.cfg.embedding_api_key,
                    base_url=self.cfg.embedding_base_url,
                    timeout=self.timeout,
                    max_retries=0,
                )
        return self._client

    def embed(self, text: str) -> np.ndarray:
        client = self._get_client()

        kwargs = {"model": self.model, "input": text}
        if self.send_dimensions:
            kwargs["dimensions"] = self.dimensions

        try:
            resp = client.embeddings.create(**kwargs)
        except openai.APIError as e:
            self.logger.warning("Embedding call failed (%s): %s", type(e).__name__, e)
            raise ProviderError(f"Embedding call failed: {type(e).__name__}") from e

        return self._validate(resp)

    def _validate(self, resp: Any) -> np.ndarray:
        data = getattr(resp, "data", None)
        if not data:
            raise ProviderError("Embedding response contained no data")

        values = getattr(data[0], "embedding", None)
        if not values:
            raise ProviderError("Embedding response contained an empty vector")

        try:
            vec = np.asarray(values, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise ProviderError("Embedding response vector is not numeric") from e

        if vec.ndim != 1 or vec.shape[0] != self.dimensions:
            self.logger.error(
                "Dimension mismatch: expected %d, got shape %s", self.dimensions, vec.shape
            )
            raise ProviderError(
                f"Embedding has dimension {vec.shape[-1] if vec.ndim else 0}, expected {self.dimensions}"
            )

        if not np.all(np.isfinite(vec)):
            raise ProviderError("Embedding response vector contains non-finite values")

        self.logger.debug("Embedding generated: vector_length=%d", vec.shape[0])
        return vec
