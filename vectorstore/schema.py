# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-04
# Description: schema.py
# -----------------------------------------------------------------------------
"""
SQLAlchemy model for the tab_embeddings table.

Vectors are stored as real[] on PostgreSQL and as a JSON array on SQLite,
so the same model serves production and the test suite.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import ARRAY, JSON, REAL, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


VectorColumnType = ARRAY(REAL()).with_variant(JSON(), "sqlite")


class TabEmbeddingRow(Base):
    __tablename__ = "tab_embeddings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Cognito sub or device id; no FK to users
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    content_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    embedding: Mapped[List[float]] = mapped_column(VectorColumnType, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("embeddings_user_idx", "user_id"),
    )
