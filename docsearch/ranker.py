# docsearch/ranker.py
import math
from collections import defaultdict
from typing import Sequence

from docsearch.lexer import tokenize


class Ranker:
    """
    TF-IDF ranker over a corpus index.

    Requirements / assumptions:
    - `index` is a mapping: doc_id -> {term: count}, counts >= 1
    - the index is not mutated while the ranker is in use

    Scoring:
        tf(t, d)  = count(t, d) / total_tokens(d)     (0 for an empty doc)
        idf(t)    = ln(N / df(t))                     (0 if no doc has t)
        score(d)  = sum over query terms of tf(t, d) * idf(t)

    Results are ordered by score descending, then doc_id ascending.
    """

    def __init__(self, index):
        self.index = index

        # Total number of documents
        self.N = len(index)

        # Precompute document frequency (df) per term and token totals per doc
        self.df = defaultdict(int)
        self.doc_totals = {}
        for doc_id, tf in index.items():
            self.doc_totals[doc_id] = sum(tf.values())
            for term, count in tf.items():
                if count > 0:
                    self.df[term] += 1
        self.df = dict(self.df)

    def tf(self, term, doc_id):
        total = self.doc_totals.get(doc_id, 0)
        if total == 0:
            return 0.0
        return self.index[doc_id].get(term, 0) / total

    def idf(self, term):
        df = self.df.get(term, 0)
        if df == 0:
            return 0.0
        return math.log(self.N / df)

    def score(self, doc_id, terms: Sequence[str]) -> float:
        """TF-IDF score of one document for already-normalized `terms`."""
        return sum(self.tf(t, doc_id) * self.idf(t) for t in terms)

    def rank(self, query: str | Sequence[str], limit: int | None = None):
        """
        Rank every document in the index for `query`.

        Args:
            query: raw query string (tokenized like documents), or a
                   sequence of already-normalized terms
            limit: None for all documents, otherwise keep the first `limit`
                   entries of the full ordering. Documents tied at the cutoff
                   are kept or dropped by doc_id order, never arbitrarily.

        Returns:
            list[(doc_id, score)], score descending then doc_id ascending.
            Empty if the query has no terms or the index has no documents.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        terms = tokenize(query) if isinstance(query, str) else list(query)
        if not terms or self.N == 0:
            return []

        # Only terms present in the corpus can move a score away from 0
        weights = defaultdict(float)
        for t in terms:
            idf = self.idf(t)
            if idf > 0.0:
                weights[t] += idf

        scores = dict.fromkeys(self.index, 0.0)
        for doc_id, tf in self.index.items():
            total = self.doc_totals[doc_id]
            if total == 0:
                continue
            s = 0.0
            for t, w in weights.items():
                count = tf.get(t)
                if count:
                    s += (count / total) * w
            scores[doc_id] = s

        ranked = sorted(scores.items(), key=lambda x: (-x[1], x[0]))
        return ranked[:limit] if limit is not None else ranked
