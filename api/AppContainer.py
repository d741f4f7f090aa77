# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-10-08
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from functools import lru_cache

import settings
from auth.IdentityResolver import IdentityResolver
from config.Config import Config
from embedding.CachingEmbedder import CachingEmbedder
from embedding.TabEmbedder import TabEmbedder
from health.TestRunner import TestRunner
from ranking.SimilarityRanker import SimilarityRanker
from services.SemanticIndexService import SemanticIndexService
from services.TabHealthService import TabHealthService
from utility.logging_utils import get_class_logger
from vectorstore.SqlTabVectorStore import SqlTabVectorStore, build_engine


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Starting with config: %s", self.cfg.summary())

        # Identity
        self.identity = IdentityResolver(cfg=self.cfg)

        # Core infrastructure
        embedder = TabEmbedder(
            cfg=self.cfg,
            dimensions=settings.EMBEDDING_DIMENSIONS,
            send_dimensions=settings.EMBEDDING_SEND_DIMENSIONS,
            timeout=settings.EMBEDDING_TIMEOUT_SECONDS,
        )
        if settings.EMBEDDING_CACHE_SIZE > 0:
            self.embedder = CachingEmbedder(embedder, maxsize=settings.EMBEDDING_CACHE_SIZE)
        else:
            self.embedder = embedder

        self.engine = build_engine(
            self.cfg.database_url,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        self.store = SqlTabVectorStore(engine=self.engine, dimensions=settings.EMBEDDING_DIMENSIONS)
        if settings.DB_CREATE_SCHEMA:
            self.store.create_schema()

        self.ranker = SimilarityRanker(dimensions=settings.EMBEDDING_DIMENSIONS)

        # Return a singleton SemanticIndexService instance
        self.index_service = SemanticIndexService(
            embedder=self.embedder,
            store=self.store,
            ranker=self.ranker,
        )

        # Return a singleton TabHealthService instance
        self.health_service = TabHealthService(
            test_runner=TestRunner(embedder=self.embedder, store=self.store),
            embedder=self.embedder,
        )


@lru_cache
def get_app_container() -> AppContainer:
    # Built on first request so importing the app needs no environment
    return AppContainer()
