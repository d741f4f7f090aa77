# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-06
# Description: SemanticIndexService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

import settings
from embedding.EmbeddingRecord import EmbeddingRecord, PageEmbedding
from ranking.SimilarityRanker import RankedResult, ScoreConvention, SimilarityRanker
from utility.errors import Unauthorized, ValidationError
from utility.logging_utils import get_class_logger
from vectorstore.TabVectorStore import TabVectorStore


@dataclass(frozen=True)
class SearchHit:
    id: str
    url: str
    title: str
    summary: Optional[str]
    score: float


@dataclass(frozen=True)
class HistoryHit:
    url: str
    title: str
    last_seen: Optional[datetime]
    score: float


class SemanticIndexService:
    """
    Owns the semantic index/query pipeline for one user at a time:
      - index:   validate -> embed(title | url | summary) -> insert
      - search:  validate -> embed(query) -> scan user's rows -> rank -> top-K

    The user id always comes from the caller's resolved identity and every
    storage read is scoped to it.
    """

    SEARCH_CONVENTION = ScoreConvention.COSINE_DISTANCE
    HISTORY_CONVENTION = ScoreConvention.ROUNDED_SIMILARITY
    LISTING_CONVENTION = ScoreConvention.COSINE

    def __init__(
        self,
        *,
        embedder: Any,
        store: TabVectorStore,
        ranker: SimilarityRanker,
        search_max_k: int = settings.SEARCH_MAX_K,
        history_max_k: int = settings.HISTORY_MAX_K,
        listing_max_k: int = settings.LISTING_MAX_K,
        max_query_chars: int = settings.MAX_QUERY_CHARS,
        logger: logging.Logger | None = None,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.ranker = ranker
        self.search_max_k = search_max_k
        self.history_max_k = history_max_k
        self.listing_max_k = listing_max_k
        self.max_query_chars = max_query_chars
        self.logger = logger or get_class_logger(self.__class__)

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------
    def index(
        self,
        user_id: Optional[str],
        *,
        url: str,
        title: str,
        summary: Optional[str] = None,
    ) -> EmbeddingRecord:
        user_id = self._require_user(user_id)

        url = (url or "").strip()
        title = title or ""
        if not url:
            raise ValidationError("url must not be empty")
        if len(url) > settings.MAX_URL_CHARS:
            raise ValidationError(f"url exceeds {settings.MAX_URL_CHARS} characters")
        if len(title) > settings.MAX_TITLE_CHARS:
            raise ValidationError(f"title exceeds {settings.MAX_TITLE_CHARS} characters")
        if summary is not None and len(summary) > settings.MAX_SUMMARY_CHARS:
            raise ValidationError(f"summary exceeds {settings.MAX_SUMMARY_CHARS} characters")

        text = self.embedder.compose_page_text(title, url, summary)
        vector = self.embedder.embed(text)

        record = self.store.insert(
            PageEmbedding(
                user_id=user_id,
                url=url,
                title=title,
                summary=summary or None,
                vector=vector,
            )
        )
        self.logger.info("Indexed url for user '%s' as id=%s", user_id, record.id)
        return record

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------
    def search(self, user_id: Optional[str], *, query_text: str, k: int = settings.DEFAULT_K) -> List[SearchHit]:
        ranked = self._rank(user_id, query_text, k, ceiling=self.search_max_k)
        return [
            SearchHit(
                id=str(r.record.id),
                url=r.record.url,
                title=r.record.title,
                summary=r.record.summary,
                score=r.presented(self.SEARCH_CONVENTION),
            )
            for r in ranked
        ]

    def history_search(
        self, user_id: Optional[str], *, query_text: str, k: int = settings.DEFAULT_K
    ) -> List[HistoryHit]:
        ranked = self._rank(user_id, query_text, k, ceiling=self.history_max_k)
        return [
            HistoryHit(
                url=r.record.url,
                title=r.record.title,
                last_seen=r.record.updated_at,
                score=r.presented(self.HISTORY_CONVENTION),
            )
            for r in ranked
        ]

    def list_similar(
        self, user_id: Optional[str], *, query_text: str, k: int = settings.DEFAULT_K
    ) -> List[RankedResult]:
        return self._rank(user_id, query_text, k, ceiling=self.listing_max_k)

    def _rank(self, user_id: Optional[str], query_text: str, k: int, *, ceiling: int) -> List[RankedResult]:
        user_id = self._require_user(user_id)
        query_text = self._validate_query(query_text)
        k = self._clamp_k(k, ceiling)

        query_vector = self.embedder.embed(query_text)
        candidates = self.store.scan_by_user(user_id)
        if not candidates:
            self.logger.info("No stored embeddings for user '%s'", user_id)
            return []

        ranked = self.ranker.top_k(query_vector, candidates, k)
        self.logger.info(
            "Semantic query for user '%s': %d candidates, returning %d (k=%d)",
            user_id,
            len(candidates),
            len(ranked),
            k,
        )
        return ranked

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        user_id = (user_id or "").strip()
        if not user_id:
            raise Unauthorized("No user identity on request")
        return user_id

    def _validate_query(self, query_text: str) -> str:
        query_text = (query_text or "").strip()
        if not query_text:
            raise ValidationError("query must not be empty")
        if len(query_text) > self.max_query_chars:
            raise ValidationError(f"query exceeds {self.max_query_chars} characters")
        return query_text

    @staticmethod
    def _clamp_k(k: Any, ceiling: int) -> int:
        if isinstance(k, bool) or not isinstance(k, int):
            raise ValidationError(f"k must be an integer, got {k!r}")
        if k < 1:
            raise ValidationError(f"k must be at least 1, got {k}")
        return min(k, ceiling)
