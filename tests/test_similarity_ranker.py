# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-09
# Description: test_similarity_ranker.py
# -----------------------------------------------------------------------------
import math
import uuid
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from embedding.EmbeddingRecord import EmbeddingRecord
from ranking.SimilarityRanker import (
    ScoreConvention,
    SimilarityRanker,
    batch_cosine_similarity,
    cosine_similarity,
)

T0 = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _record(vector, *, url="https://example.com", updated_at=T0, rid=None) -> EmbeddingRecord:
    return EmbeddingRecord(
        id=rid or uuid.uuid4(),
        user_id="u1",
        url=url,
        title=url,
        vector=np.asarray(vector, dtype=np.float32),
        created_at=updated_at,
        updated_at=updated_at,
    )


def _vector_with_similarity(sim: float) -> list:
    # unit vector at angle acos(sim) from the x axis, in the x/y plane
    return [sim, math.sqrt(1.0 - sim * sim), 0.0, 0.0]


QUERY = np.asarray([1.0, 0.0, 0.0, 0.0], dtype=np.float32)


def test_cosine_similarity_basic_values():
    assert cosine_similarity(QUERY, QUERY) == pytest.approx(1.0)
    assert cosine_similarity(QUERY, -QUERY) == pytest.approx(-1.0)
    assert cosine_similarity(QUERY, np.asarray([0, 1, 0, 0])) == pytest.approx(0.0)


def test_cosine_similarity_is_magnitude_invariant():
    v = np.asarray([1.0, 2.0, 3.0, 4.0])
    assert cosine_similarity(v, 10 * v) == pytest.approx(1.0)


def test_cosine_similarity_zero_vector_is_zero_not_error():
    zero = np.zeros(4)
    assert cosine_similarity(QUERY, zero) == 0.0
    assert cosine_similarity(zero, zero) == 0.0


def test_cosine_similarity_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        cosine_similarity(QUERY, np.ones(3))


def test_batch_matches_scalar():
    matrix = np.asarray([[1, 2, 3, 4], [0, 0, 0, 0], [-1, 0, 0, 0]], dtype=np.float32)
    sims = batch_cosine_similarity(QUERY, matrix)
    expected = [cosine_similarity(QUERY, row) for row in matrix]
    assert sims.tolist() == pytest.approx(expected)


def test_top_k_orders_by_similarity(ranker):
    a = _record(_vector_with_similarity(0.9), url="a")
    b = _record(_vector_with_similarity(0.5), url="b")
    c = _record(_vector_with_similarity(-0.2), url="c")

    results = ranker.top_k(QUERY, [c, a, b], k=2)

    assert [r.record.url for r in results] == ["a", "b"]
    assert results[0].similarity == pytest.approx(0.9, abs=1e-6)
    assert results[1].similarity == pytest.approx(0.5, abs=1e-6)


def test_zero_vector_sorts_below_positive_similarity(ranker):
    zero = _record([0, 0, 0, 0], url="zero")
    pos = _record(_vector_with_similarity(0.1), url="pos")
    neg = _record(_vector_with_similarity(-0.3), url="neg")

    results = ranker.top_k(QUERY, [zero, neg, pos], k=3)

    assert [r.record.url for r in results] == ["pos", "zero", "neg"]
    assert results[1].similarity == 0.0


def test_ties_break_by_most_recently_updated(ranker):
    vec = _vector_with_similarity(0.7)
    older = _record(vec, url="older", updated_at=T0)
    newer = _record(vec, url="newer", updated_at=T0 + timedelta(minutes=5))

    first = ranker.top_k(QUERY, [older, newer], k=2)
    second = ranker.top_k(QUERY, [newer, older], k=2)

    assert [r.record.url for r in first] == ["newer", "older"]
    assert [r.record.url for r in second] == ["newer", "older"]


def test_identical_similarity_and_timestamp_falls_back_to_id(ranker):
    vec = _vector_with_similarity(0.4)
    id_a = uuid.UUID("00000000-0000-4000-8000-000000000001")
    id_b = uuid.UUID("00000000-0000-4000-8000-000000000002")
    a = _record(vec, url="a", rid=id_a)
    b = _record(vec, url="b", rid=id_b)

    assert [r.record.url for r in ranker.top_k(QUERY, [b, a], k=2)] == ["a", "b"]
    assert [r.record.url for r in ranker.top_k(QUERY, [a, b], k=2)] == ["a", "b"]


def test_k_larger_than_candidates_returns_all(ranker):
    recs = [_record(_vector_with_similarity(s)) for s in (0.1, 0.2)]
    assert len(ranker.top_k(QUERY, recs, k=50)) == 2


def test_empty_candidates(ranker):
    assert ranker.top_k(QUERY, [], k=5) == []


def test_invalid_k_rejected(ranker):
    with pytest.raises(ValueError):
        ranker.top_k(QUERY, [], k=0)


def test_query_dimension_mismatch_rejected(ranker):
    with pytest.raises(ValueError):
        ranker.top_k(np.ones(3), [_record([1, 0, 0, 0])], k=1)


def test_candidate_dimension_mismatch_excluded(ranker):
    good = _record([1, 0, 0, 0], url="good")
    bad = _record([1, 0, 0], url="bad")

    results = ranker.top_k(QUERY, [bad, good], k=5)

    assert [r.record.url for r in results] == ["good"]


def test_ranker_requires_positive_dimension():
    with pytest.raises(ValueError):
        SimilarityRanker(dimensions=0)


@pytest.mark.parametrize(
    "sim, expected",
    [(1.0, 0.0), (0.25, 0.75), (0.0, 1.0), (-1.0, 2.0)],
)
def test_cosine_distance_convention(sim, expected):
    assert ScoreConvention.COSINE_DISTANCE.present(sim) == pytest.approx(expected)


@pytest.mark.parametrize(
    "sim, expected",
    [(0.9, 0.9), (0.123, 0.12), (0.125, 0.13), (0.0, 0.0), (-0.456, -0.46)],
)
def test_rounded_similarity_convention(sim, expected):
    assert ScoreConvention.ROUNDED_SIMILARITY.present(sim) == pytest.approx(expected)


def test_cosine_convention_is_identity():
    assert ScoreConvention.COSINE.present(0.42) == 0.42
