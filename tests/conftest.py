# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-10-09
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Optional

import numpy as np
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from embedding.TabEmbedder import TabEmbedder  # noqa: E402
from ranking.SimilarityRanker import SimilarityRanker  # noqa: E402
from vectorstore.SqlTabVectorStore import SqlTabVectorStore  # noqa: E402

TEST_DIM = 4


class StubEmbedder:
    """
    Deterministic stand-in for TabEmbedder: returns the vector registered
    for a text, or a default. Set `error` to make every call raise it.
    """

    model = "stub-embedding"
    dimensions = TEST_DIM

    def __init__(self, default: Optional[List[float]] = None):
        self.vectors: Dict[str, np.ndarray] = {}
        self.default = np.asarray(default or [0.5, 0.5, 0.5, 0.5], dtype=np.float32)
        self.calls: List[str] = []
        self.error: Optional[Exception] = None
        self.configured = True

    compose_page_text = staticmethod(TabEmbedder.compose_page_text)

    def register(self, text: str, vector: List[float]) -> None:
        self.vectors[text] = np.asarray(vector, dtype=np.float32)

    def is_configured(self) -> bool:
        return self.configured

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vectors.get(text, self.default).copy()


class FakeEmbeddingsAPI:
    """Mimics client.embeddings.create() of the openai SDK."""

    def __init__(self, vector=None, error: Optional[Exception] = None):
        self.vector = vector
        self.error = error
        self.requests: List[dict] = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        data = [] if self.vector is None else [SimpleNamespace(embedding=self.vector)]
        return SimpleNamespace(data=data)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine) -> SqlTabVectorStore:
    s = SqlTabVectorStore(engine=engine, dimensions=TEST_DIM)
    s.create_schema()
    return s


@pytest.fixture
def ranker() -> SimilarityRanker:
    return SimilarityRanker(dimensions=TEST_DIM)


@pytest.fixture
def stub_embedder() -> StubEmbedder:
    return StubEmbedder()


@pytest.fixture
def fake_embeddings_api():
    def _make(vector=None, error=None) -> FakeEmbeddingsAPI:
        return FakeEmbeddingsAPI(vector=vector, error=error)
    return _make
