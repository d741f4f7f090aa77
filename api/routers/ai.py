# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-08
# Description: ai router
# -----------------------------------------------------------------------------
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

import settings
from api.dependencies import get_current_user_id, get_health_service, get_index_service
from api.schemas.ai import (
    EmbedRequest,
    EmbedResponse,
    HistoryResponse,
    HistoryResult,
    SearchRequest,
    SearchResponse,
    SearchResult,
    SimilarResponse,
)
from api.schemas.health import AiHealthResponse
from services.SemanticIndexService import SemanticIndexService
from services.TabHealthService import TabHealthService
from utility.errors import SemanticSearchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def _to_http(route: str, e: SemanticSearchError) -> HTTPException:
    if e.status_code >= 500:
        logger.error("%s -> %d %s: %s", route, e.status_code, e.kind, e.message)
    else:
        logger.warning("%s -> %d %s: %s", route, e.status_code, e.kind, e.message)
    return HTTPException(status_code=e.status_code, detail={"error": e.kind, "message": e.message})


@router.post("/embed", response_model=EmbedResponse, status_code=201)
def post_embed(
    req: EmbedRequest,
    user_id: str = Depends(get_current_user_id),
    svc: SemanticIndexService = Depends(get_index_service),
) -> EmbedResponse:
    logger.info("POST /api/ai/embed (start) user='%s'", user_id)
    try:
        record = svc.index(user_id, url=req.url, title=req.title, summary=req.summary)
    except SemanticSearchError as e:
        raise _to_http("POST /api/ai/embed", e)

    return EmbedResponse(**record.public_fields())


@router.post("/search", response_model=SearchResponse)
def post_search(
    req: SearchRequest,
    user_id: str = Depends(get_current_user_id),
    svc: SemanticIndexService = Depends(get_index_service),
) -> SearchResponse:
    query_text = (req.query or "").strip()
    logger.info("POST /api/ai/search (start) user='%s' limit=%d", user_id, req.limit)
    try:
        hits = svc.search(user_id, query_text=query_text, k=req.limit)
    except SemanticSearchError as e:
        raise _to_http("POST /api/ai/search", e)

    return SearchResponse(
        query=query_text,
        convention=svc.SEARCH_CONVENTION,
        results=[SearchResult(**asdict(h)) for h in hits],
    )


@router.get("/history", response_model=HistoryResponse)
def get_history(
    q: str = Query("", max_length=settings.MAX_QUERY_CHARS),
    limit: int = Query(settings.DEFAULT_K, ge=1),
    user_id: str = Depends(get_current_user_id),
    svc: SemanticIndexService = Depends(get_index_service),
) -> HistoryResponse:
    query_text = (q or "").strip()
    if not query_text:
        logger.warning("GET /api/ai/history -> 400 (q empty)")
        raise HTTPException(status_code=400, detail="Missing query param ?q=")

    logger.info("GET /api/ai/history (start) user='%s' limit=%d", user_id, limit)
    try:
        hits = svc.history_search(user_id, query_text=query_text, k=limit)
    except SemanticSearchError as e:
        raise _to_http("GET /api/ai/history", e)

    return HistoryResponse(
        query=query_text,
        convention=svc.HISTORY_CONVENTION,
        results=[HistoryResult(**asdict(h)) for h in hits],
    )


@router.get("/similar", response_model=SimilarResponse)
def get_similar(
    q: str = Query("", max_length=settings.MAX_QUERY_CHARS),
    limit: int = Query(settings.DEFAULT_K, ge=1),
    user_id: str = Depends(get_current_user_id),
    svc: SemanticIndexService = Depends(get_index_service),
) -> SimilarResponse:
    query_text = (q or "").strip()
    if not query_text:
        logger.warning("GET /api/ai/similar -> 400 (q empty)")
        raise HTTPException(status_code=400, detail="Missing query param ?q=")

    logger.info("GET /api/ai/similar (start) user='%s' limit=%d", user_id, limit)
    try:
        ranked = svc.list_similar(user_id, query_text=query_text, k=limit)
    except SemanticSearchError as e:
        raise _to_http("GET /api/ai/similar", e)

    return SimilarResponse(
        query=query_text,
        convention=svc.LISTING_CONVENTION,
        results=[
            SearchResult(
                id=str(r.record.id),
                url=r.record.url,
                title=r.record.title,
                summary=r.record.summary,
                score=r.presented(svc.LISTING_CONVENTION),
            )
            for r in ranked
        ],
    )


@router.get("/health", response_model=AiHealthResponse, response_model_exclude_none=True)
def get_ai_health(svc: TabHealthService = Depends(get_health_service)):
    result = svc.ai()
    if result.status != "ok":
        return JSONResponse(status_code=503, content=result.model_dump(exclude_none=True))
    return result
