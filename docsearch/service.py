"""
docsearch/service.py

Query façade used by the HTTP layer and the CLI.

The service owns one IndexSnapshot (index + ranker, never mutated). Queries
grab the current snapshot once and work on it; reload() builds a complete new
snapshot and only then swaps the reference, so concurrent readers need no
lock and never see a half-loaded index.
"""

import logging
import time
from dataclasses import dataclass

from docsearch.ranker import Ranker
from docsearch.storage import load_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSnapshot:
    index: dict
    ranker: Ranker
    source: str | None = None

    @classmethod
    def from_index(cls, index, source=None):
        return cls(index=index, ranker=Ranker(index), source=source)

    @classmethod
    def load(cls, path):
        return cls.from_index(load_index(path), source=path)

    def __len__(self):
        return len(self.index)


@dataclass(frozen=True)
class SearchHit:
    doc_id: str
    score: float

    def to_dict(self):
        return {"documentId": self.doc_id, "score": self.score}


@dataclass(frozen=True)
class SearchResponse:
    query: str
    hits: list[SearchHit]
    total: int          # ranked documents before the limit was applied
    elapsed_ms: float

    def to_dict(self):
        return {
            "query": self.query,
            "results": [h.to_dict() for h in self.hits],
            "totalResults": self.total,
            "searchTime": self.elapsed_ms,
        }


class QueryService:
    """
    Typical usage:
        service = QueryService.from_path("index.json")
        resp = service.search("bind texture to buffer", limit=10)
        for hit in resp.hits:
            print(hit.doc_id, hit.score)
    """

    def __init__(self, snapshot: IndexSnapshot):
        self._snapshot = snapshot

    @classmethod
    def from_path(cls, path):
        logger.info("[Service] Reading %s index file...", path)
        snapshot = IndexSnapshot.load(path)
        logger.info("[Service] %s contains %d files", path, len(snapshot))
        return cls(snapshot)

    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    def search(self, query: str, limit: int | None = None) -> SearchResponse:
        """
        Rank the loaded corpus for `query`.
        An empty or all-whitespace query gives an empty hit list.
        Raises ValueError for a negative limit.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        snapshot = self._snapshot
        start = time.perf_counter()
        ranked = snapshot.ranker.rank(query)
        hits = ranked if limit is None else ranked[:limit]
        elapsed = (time.perf_counter() - start) * 1000
        return SearchResponse(
            query=query,
            hits=[SearchHit(d, s) for d, s in hits],
            total=len(ranked),
            elapsed_ms=elapsed,
        )

    def reload(self, path=None) -> IndexSnapshot:
        """
        Load a fresh index and swap it in.
        On PersistenceError the current snapshot stays in place.
        """
        path = path or self._snapshot.source
        if path is None:
            raise ValueError("no index path to reload from")
        snapshot = IndexSnapshot.load(path)
        self._snapshot = snapshot
        logger.info("[Service] Reloaded %s (%d documents)", path, len(snapshot))
        return snapshot
