# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-08
# Description: ai.py
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

import settings
from ranking.SimilarityRanker import ScoreConvention


class EmbedRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=settings.MAX_URL_CHARS)
    title: str = Field(..., max_length=settings.MAX_TITLE_CHARS)
    summary: Optional[str] = Field(None, max_length=settings.MAX_SUMMARY_CHARS)

class EmbedResponse(BaseModel):
    id: str
    url: str


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=settings.MAX_QUERY_CHARS)
    # no upper bound here: the service clamps to its ceiling
    limit: int = Field(settings.DEFAULT_K, ge=1)

class SearchResult(BaseModel):
    id: str
    url: str
    title: str
    summary: Optional[str] = None
    score: float

class SearchResponse(BaseModel):
    query: str
    convention: ScoreConvention
    results: List[SearchResult]


class HistoryResult(BaseModel):
    url: str
    title: str
    last_seen: Optional[datetime] = None
    score: float

class HistoryResponse(BaseModel):
    query: str
    convention: ScoreConvention
    results: List[HistoryResult]


class SimilarResponse(BaseModel):
    query: str
    convention: ScoreConvention
    results: List[SearchResult]
