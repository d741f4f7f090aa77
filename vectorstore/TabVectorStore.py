# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Updated: 2026-10-04
# Description: TabVectorStore
# -----------------------------------------------------------------------------

from typing import List, Protocol, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord, PageEmbedding


@runtime_checkable
class TabVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def insert(self, page: PageEmbedding) -> EmbeddingRecord:
        ...

    def scan_by_user(self, user_id: str) -> List[EmbeddingRecord]:
        ...
