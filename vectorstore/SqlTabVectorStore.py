# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-04
# Description: SqlTabVectorStore
# -----------------------------------------------------------------------------
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List

import numpy as np
from sqlalchemy import create_engine, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from embedding.EmbeddingRecord import EmbeddingRecord, PageEmbedding
from utility.errors import PersistenceError
from utility.logging_utils import get_class_logger
from vectorstore.TabVectorStore import TabVectorStore
from vectorstore.schema import Base, TabEmbeddingRow


def build_engine(database_url: str, *, pool_size: int = 10, max_overflow: int = 0) -> Engine:
    """Engine with a bounded pool shared by all requests."""
    if database_url.startswith("sqlite"):
        return create_engine(database_url)
    return create_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
    )


@dataclass
class SqlTabVectorStore(TabVectorStore):
    """
    Append-only store of page embeddings in a relational table.

    insert() never updates or deduplicates: indexing the same URL twice
    yields two rows. scan_by_user() filters on user_id with a bound
    parameter and returns rows in no particular order.
    """
    engine: Engine
    dimensions: int = 768
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.logger.info(
            "SqlTabVectorStore ready (dialect=%s, dim=%d)",
            self.engine.dialect.name,
            self.dimensions,
        )

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)
        self.logger.info("Ensured table '%s' exists", TabEmbeddingRow.__tablename__)

    def test_connection(self) -> bool:
        """
        Simple health check: can we open a connection and run a trivial query?
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            self.logger.error("Database connection failed: %s", e)
            return False

    def insert(self, page: PageEmbedding) -> EmbeddingRecord:
        vec = np.asarray(page.vector, dtype=np.float32)
        if vec.ndim != 1 or vec.shape[0] != self.dimensions:
            raise ValueError(
                f"vector has shape {vec.shape}, expected ({self.dimensions},)"
            )
        if not page.user_id:
            raise ValueError("user_id must not be empty")

        now = datetime.now(timezone.utc)
        row = TabEmbeddingRow(
            id=uuid.uuid4(),
            user_id=page.user_id,
            url=page.url,
            title=page.title,
            content_summary=page.summary,
            embedding=[float(x) for x in vec],
            created_at=now,
            updated_at=now,
        )

        try:
            with self._sessions.begin() as session:
                session.add(row)
        except SQLAlchemyError as e:
            self.logger.error("Insert into '%s' failed: %s", TabEmbeddingRow.__tablename__, e)
            raise PersistenceError("Failed to store embedding") from e

        self.logger.info("Stored embedding id=%s for user '%s'", row.id, page.user_id)
        return self._to_record(row)

    def scan_by_user(self, user_id: str) -> List[EmbeddingRecord]:
        if not user_id:
            raise ValueError("user_id must not be empty")

        stmt = select(TabEmbeddingRow).where(TabEmbeddingRow.user_id == user_id)
        try:
            with Session(self.engine) as session:
                rows = session.scalars(stmt).all()
                records = [self._to_record(r) for r in rows]
        except SQLAlchemyError as e:
            self.logger.error("Scan of '%s' failed: %s", TabEmbeddingRow.__tablename__, e)
            raise PersistenceError("Failed to read embeddings") from e

        self.logger.debug("Scanned %d embeddings for user '%s'", len(records), user_id)
        return records

    @staticmethod
    def _as_utc(ts: datetime | None) -> datetime | None:
        # SQLite hands back naive datetimes; everything is written in UTC
        if ts is not None and ts.tzinfo is None:
            return ts.replace(tzinfo=timezone.utc)
        return ts

    @classmethod
    def _to_record(cls, row: TabEmbeddingRow) -> EmbeddingRecord:
        return EmbeddingRecord(
            id=row.id,
            user_id=row.user_id,
            url=row.url,
            title=row.title,
            summary=row.content_summary,
            vector=np.asarray(row.embedding, dtype=np.float32),
            created_at=cls._as_utc(row.created_at),
            updated_at=cls._as_utc(row.updated_at),
        )
