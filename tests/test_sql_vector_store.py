# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-09
# Description: test_sql_vector_store.py
# -----------------------------------------------------------------------------
import uuid

import numpy as np
import pytest
from sqlalchemy import text

from embedding.EmbeddingRecord import PageEmbedding
from utility.errors import PersistenceError
from vectorstore.SqlTabVectorStore import SqlTabVectorStore
from vectorstore.TabVectorStore import TabVectorStore


def _page(user_id: str, url: str, vector=(1.0, 0.0, 0.0, 0.0), summary=None) -> PageEmbedding:
    return PageEmbedding(
        user_id=user_id,
        url=url,
        title=f"Title of {url}",
        summary=summary,
        vector=np.asarray(vector, dtype=np.float32),
    )


def test_store_satisfies_protocol(store):
    assert isinstance(store, TabVectorStore)


def test_insert_assigns_id_and_timestamps(store):
    rec = store.insert(_page("u1", "https://a.com", summary="about a"))

    assert isinstance(rec.id, uuid.UUID)
    assert rec.created_at is not None
    assert rec.updated_at == rec.created_at
    assert rec.public_fields() == {"id": str(rec.id), "url": "https://a.com"}


def test_scan_round_trips_fields(store):
    stored = store.insert(_page("u1", "https://a.com", vector=(0.1, 0.2, 0.3, 0.4), summary="s"))

    [rec] = store.scan_by_user("u1")

    assert rec.id == stored.id
    assert rec.url == "https://a.com"
    assert rec.title == "Title of https://a.com"
    assert rec.summary == "s"
    assert rec.vector.dtype == np.float32
    assert rec.vector.tolist() == pytest.approx([0.1, 0.2, 0.3, 0.4])
    assert rec.updated_at.tzinfo is not None


def test_scan_is_scoped_to_user(store):
    for i in range(3):
        store.insert(_page("alice", f"https://alice.example/{i}"))
        store.insert(_page("bob", f"https://bob.example/{i}"))

    alice = store.scan_by_user("alice")
    bob = store.scan_by_user("bob")

    assert len(alice) == 3 and len(bob) == 3
    assert all(r.user_id == "alice" for r in alice)
    assert all(r.user_id == "bob" for r in bob)
    assert store.scan_by_user("carol") == []


def test_scan_does_not_match_sql_fragments(store):
    store.insert(_page("alice", "https://a.com"))
    assert store.scan_by_user("' OR '1'='1") == []


def test_duplicate_urls_append(store):
    first = store.insert(_page("u1", "https://same.com"))
    second = store.insert(_page("u1", "https://same.com"))

    recs = store.scan_by_user("u1")

    assert first.id != second.id
    assert {r.id for r in recs} == {first.id, second.id}


def test_insert_rejects_wrong_dimension(store):
    with pytest.raises(ValueError):
        store.insert(_page("u1", "https://a.com", vector=(1.0, 0.0, 0.0)))
    assert store.scan_by_user("u1") == []


def test_empty_user_rejected(store):
    with pytest.raises(ValueError):
        store.insert(_page("", "https://a.com"))
    with pytest.raises(ValueError):
        store.scan_by_user("")


def test_test_connection(store):
    assert store.test_connection() is True


def test_storage_failure_becomes_persistence_error(engine):
    # no create_schema(): the table does not exist
    bare = SqlTabVectorStore(engine=engine, dimensions=4)

    with pytest.raises(PersistenceError):
        bare.insert(_page("u1", "https://a.com"))
    with pytest.raises(PersistenceError):
        bare.scan_by_user("u1")


def test_dropped_table_surfaces_on_scan(store, engine):
    store.insert(_page("u1", "https://a.com"))
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE tab_embeddings"))

    with pytest.raises(PersistenceError):
        store.scan_by_user("u1")
