import logging
from typing import List, Optional, Tuple

from sitesearch.domain.search_index import SearchIndex
from sitesearch.services import ranker

logger = logging.getLogger(__name__)


class SearchService:
    """Read-only query front for a loaded index, shared by every API request."""

    def __init__(self, index: Optional[SearchIndex] = None):
        self.index = index

    @property
    def ready(self) -> bool:
        return self.index is not None

    def ranked(self, query: str) -> List[Tuple[str, float]]:
        if self.index is None:
            return []
        hits = ranker.search_ranked(self.index, query)
        logger.debug("Ranked query %r -> %d hits", query, len(hits))
        return hits

    def exact(self, query: str) -> List[str]:
        if self.index is None:
            return []
        return ranker.search(self.index, query)

    def stats(self) -> dict:
        if self.index is None:
            return {"doc_count": 0, "term_count": 0}
        return {"doc_count": self.index.doc_count, "term_count": self.index.term_count}
