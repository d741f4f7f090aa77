# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-05
# Description: SimilarityRanker
# -----------------------------------------------------------------------------
import heapq
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from embedding.EmbeddingRecord import EmbeddingRecord
from utility.logging_utils import get_class_logger


class ScoreConvention(str, Enum):
    """
    How a ranked similarity is reported to a client.

    COSINE             raw cosine similarity in [-1, 1]
    COSINE_DISTANCE    1 - similarity in [0, 2], lower is closer
    ROUNDED_SIMILARITY similarity rounded half-up to two decimals
    """
    COSINE = "cosine"
    COSINE_DISTANCE = "cosine_distance"
    ROUNDED_SIMILARITY = "rounded_similarity"

    def present(self, similarity: float) -> float:
        if self is ScoreConvention.COSINE_DISTANCE:
            return 1.0 - similarity
        if self is ScoreConvention.ROUNDED_SIMILARITY:
            distance = 1.0 - similarity
            return math.floor((1.0 - distance) * 100 + 0.5) / 100
        return similarity


@dataclass(frozen=True)
class RankedResult:
    record: EmbeddingRecord
    similarity: float

    def presented(self, convention: ScoreConvention) -> float:
        return convention.present(self.similarity)


def cosine_similarity(q: np.ndarray, v: np.ndarray) -> float:
    """
    dot(q, v) / (||q|| * ||v||), or 0.0 when either norm is zero.
    """
    q64 = np.asarray(q, dtype=np.float64)
    v64 = np.asarray(v, dtype=np.float64)
    if q64.shape != v64.shape:
        raise ValueError(f"shape mismatch: {q64.shape} vs {v64.shape}")

    denom = float(np.linalg.norm(q64) * np.linalg.norm(v64))
    if denom == 0.0:
        return 0.0
    sim = float(np.dot(q64, v64)) / denom
    return max(-1.0, min(1.0, sim))


def batch_cosine_similarity(q: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of q against every row of matrix (N x D)."""
    q64 = np.asarray(q, dtype=np.float64)
    m64 = np.asarray(matrix, dtype=np.float64)
    if m64.size == 0:
        return np.zeros(0, dtype=np.float64)

    dots = m64 @ q64
    denoms = np.linalg.norm(m64, axis=1) * np.linalg.norm(q64)
    sims = np.zeros_like(dots)
    np.divide(dots, denoms, out=sims, where=denoms != 0.0)
    return np.clip(sims, -1.0, 1.0)


def _recency(ts: Optional[datetime]) -> float:
    return ts.timestamp() if ts is not None else float("-inf")


class SimilarityRanker:
    """
    Full-scan top-K ranking of one user's stored vectors.

    Order: similarity descending, then most recently updated first, then
    record id ascending, so an unchanged corpus always ranks the same way.
    """

    def __init__(self, dimensions: int, logger=None):
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self.dimensions = dimensions
        self.logger = logger or get_class_logger(self.__class__)

    def top_k(
            self,
            query_vector: np.ndarray,
            candidates: Sequence[EmbeddingRecord],
            k: int,
    ) -> List[RankedResult]:
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")

        q = np.asarray(query_vector, dtype=np.float32)
        if q.ndim != 1 or q.shape[0] != self.dimensions:
            raise ValueError(
                f"query vector has shape {q.shape}, expected ({self.dimensions},)"
            )

        usable: List[EmbeddingRecord] = []
        for rec in candidates:
            v = np.asarray(rec.vector)
            if v.ndim != 1 or v.shape[0] != self.dimensions:
                self.logger.warning(
                    "Skipping record id=%s: vector shape %s, expected (%d,)",
                    rec.id,
                    v.shape,
                    self.dimensions,
                )
                continue
            usable.append(rec)

        if not usable:
            return []

        matrix = np.vstack([np.asarray(r.vector, dtype=np.float32) for r in usable])
        sims = batch_cosine_similarity(q, matrix)

        scored = [RankedResult(record=r, similarity=float(s)) for r, s in zip(usable, sims)]
        top = heapq.nsmallest(
            k,
            scored,
            key=lambda rr: (-rr.similarity, -_recency(rr.record.updated_at), str(rr.record.id)),
        )

        self.logger.debug(
            "Ranked %d candidates (skipped %d), returning %d",
            len(usable),
            len(candidates) - len(usable),
            len(top),
        )
        return top
