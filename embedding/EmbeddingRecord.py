# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-10-03
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import numpy as np


@dataclass
class PageEmbedding:
    """A page and its vector, before the store assigns identity and timestamps."""
    user_id: str
    url: str
    title: str
    vector: np.ndarray
    summary: Optional[str] = None


@dataclass
class EmbeddingRecord:
    """Persisted page embedding, owned by exactly one user."""
    id: uuid.UUID
    user_id: str
    url: str
    title: str
    vector: np.ndarray = field(repr=False)
    summary: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def public_fields(self) -> dict:
        return {"id": str(self.id), "url": self.url}
