# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-10-08
# Description: dependencies.py
# -----------------------------------------------------------------------------
import logging

from fastapi import Depends, HTTPException, Request

from api.AppContainer import get_app_container
from auth.IdentityResolver import IdentityResolver
from services.SemanticIndexService import SemanticIndexService
from services.TabHealthService import TabHealthService
from utility.errors import Unauthorized

logger = logging.getLogger(__name__)


def get_identity_resolver() -> IdentityResolver:
    # use the singleton resolver from the container
    return get_app_container().identity

def get_index_service() -> SemanticIndexService:
    # use the singleton service from the container
    return get_app_container().index_service

def get_health_service() -> TabHealthService:
    # use the singleton service from the container
    return get_app_container().health_service

def get_current_user_id(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> str:
    try:
        return resolver.resolve(request.headers)
    except Unauthorized as e:
        logger.warning("%s %s -> 401 (%s)", request.method, request.url.path, e.message)
        raise HTTPException(status_code=401, detail=e.message)
