"""
docsearch/indexer.py

Builds the corpus index: doc_id -> {term: count}.

Pipeline per document:
  1) walker yields the document path
  2) extractor returns its text (or a failure, which is logged and skipped)
  3) term_frequencies() counts the document's terms

The finished index is returned only after the whole corpus has been visited.
Use storage.save_index() to persist it.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

from docsearch.config import DOC_SUFFIXES
from docsearch.errors import EnumerationError, ExtractionFailed, ExtractionResult
from docsearch.extractor import extract
from docsearch.lexer import Lexer, normalize
from docsearch.walker import walk

logger = logging.getLogger(__name__)

TermFreq = dict[str, int]
CorpusIndex = dict[str, TermFreq]


@dataclass(frozen=True)
class Skipped:
    doc_id: str
    reason: str


def term_frequencies(text: str) -> TermFreq:
    """
    Count the terms of one document.
    Every token counts; the values sum to the number of tokens in `text`.
    """
    tf = defaultdict(int)
    for token in Lexer(text):
        tf[normalize(token)] += 1
    return dict(tf)


def top_terms(tf: TermFreq, n: int = 10) -> list[tuple[str, int]]:
    """Most frequent terms first; equal counts ordered by term."""
    return sorted(tf.items(), key=lambda kv: (-kv[1], kv[0]))[:n]


class Indexer:
    """
    Full-crawl index builder.

    Typical usage:
        indexer = Indexer()
        index = indexer.build("docs.gl/gl4")
        for s in indexer.skipped:
            print(s.doc_id, s.reason)

    The extractor and walker can be swapped (e.g. in tests) as long as they
    keep the same contracts as extractor.extract and walker.walk.
    """

    def __init__(
        self,
        extract_fn: Callable[[str], ExtractionResult] = extract,
        walk_fn: Callable[..., Iterator[str]] = walk,
        suffixes: Iterable[str] = DOC_SUFFIXES,
    ):
        self.extract_fn = extract_fn
        self.walk_fn = walk_fn
        self.suffixes = tuple(suffixes)
        self.index: CorpusIndex = {}
        self.skipped: list[Skipped] = []

    def add_document(self, doc_id: str, text: str) -> TermFreq:
        tf = term_frequencies(text)
        self.index[doc_id] = tf
        return tf

    def build(self, root: str) -> CorpusIndex:
        """
        Crawl `root` and return a fresh index.

        Documents that fail extraction are skipped and recorded in
        self.skipped. EnumerationError from the walker propagates and leaves
        self.index empty.
        """
        self.index = {}
        self.skipped = []

        try:
            self._crawl(root)
        except EnumerationError:
            self.index = {}
            raise

        logger.info(
            "[Indexer] Indexed %d documents from %s (%d skipped)",
            len(self.index), root, len(self.skipped),
        )
        return self.index

    def _crawl(self, root: str):
        for doc_id in self.walk_fn(root, self.suffixes):
            result = self.extract_fn(doc_id)
            if isinstance(result, ExtractionFailed):
                logger.warning("[Indexer] Skipping %s: %s", result.doc_id, result.reason)
                self.skipped.append(Skipped(result.doc_id, result.reason))
                continue

            logger.info("[Indexer] Indexing %s...", doc_id)
            tf = self.add_document(doc_id, result.text)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("[Indexer]   %d terms, top: %s", len(tf), top_terms(tf, 5))
