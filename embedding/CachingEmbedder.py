# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-05
# Description: CachingEmbedder
# -----------------------------------------------------------------------------
from functools import lru_cache
from typing import Any

import numpy as np

from utility.logging_utils import get_class_logger


class CachingEmbedder:
    """
    LRU-bounded memo in front of another embedder, keyed by
    whitespace-normalised text. Failures are not cached.
    """

    def __init__(self, inner: Any, *, maxsize: int, logger=None):
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1, got {maxsize}")
        self.inner = inner
        self.maxsize = maxsize
        self.logger = logger or get_class_logger(self.__class__)
        self._cached_embed = lru_cache(maxsize=maxsize)(self._embed_uncached)
        self.logger.info("Embedding cache enabled (maxsize=%d)", maxsize)

    @property
    def model(self) -> str:
        return getattr(self.inner, "model", "unknown")

    @property
    def dimensions(self) -> int:
        return self.inner.dimensions

    def compose_page_text(self, *args, **kwargs) -> str:
        return self.inner.compose_page_text(*args, **kwargs)

    def is_configured(self) -> bool:
        return self.inner.is_configured()

    def _embed_uncached(self, key: str) -> np.ndarray:
        vec = self.inner.embed(key)
        vec.setflags(write=False)
        return vec

    def embed(self, text: str) -> np.ndarray:
        key = " ".join(text.split())
        # Hand out copies so callers cannot mutate the cached array
        return np.array(self._cached_embed(key), copy=True)

    def cache_info(self):
        return self._cached_embed.cache_info()

    def cache_clear(self) -> None:
        self._cached_embed.cache_clear()
