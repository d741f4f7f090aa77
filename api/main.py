# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-10-08
# Description: main.py
# -----------------------------------------------------------------------------
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

import settings
from api.routers import ai, health
from config.Config import Config

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)

app = FastAPI(title="TabFlow API", version=settings.SERVICE_VERSION)

# The browser extension and local tooling are the only clients
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^(chrome-extension://.*|http://localhost(:\d+)?)$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if not Config.production_env(Config.environment_from_env()):
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

app.include_router(health.router)
app.include_router(ai.router)
