"""
BM25 Index - keyword ranking over an immutable in-memory document collection

Implements Okapi BM25 with a smoothed IDF, scored with numpy over per-term
postings that are computed once when the index is built.

Formula:
    idf(t) = ln((N - df(t) + 0.5) / (df(t) + 0.5) + 1)
    score(q, d) = sum over t in q of
        idf(t) * tf * (k1 + 1) / (tf + k1 * (1 - b + b * dl / avgdl))
"""

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import numpy as np

from .error_handling import IndexingError, log_debug

K1 = 1.5
B = 0.75

_NON_WORD = re.compile(r"[^\w\s]")


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase word tokens.

    Every character that is not a word character or whitespace becomes a
    space, the result is split on whitespace and single-character tokens are
    dropped. Documents and queries go through the same function.

    Examples:
        >>> tokenize("Glassmorphism, dark-mode card!")
        ['glassmorphism', 'dark', 'mode', 'card']

        >>> tokenize("a b   ")
        []
    """
    if not text:
        return []
    return [token for token in _NON_WORD.sub(" ", text.lower()).split() if len(token) > 1]


@dataclass(frozen=True)
class Document:
    """A searchable record: concatenated text plus the original data."""

    id: str
    content: str
    data: Mapping[str, Any] = field(default_factory=dict)

    @property
    def type(self) -> str:
        return str(self.data.get("type", ""))


@dataclass(frozen=True)
class ScoredDocument:
    """A document paired with its BM25 score for one query."""

    document: Document
    score: float


class BM25Index:
    """Immutable BM25 index; rebuild by constructing a new instance."""

    def __init__(self, documents: Sequence[Document]):
        if not documents:
            raise IndexingError("Cannot build a BM25 index without documents")

        self._documents: Tuple[Document, ...] = tuple(documents)
        self._tokens: Tuple[Tuple[str, ...], ...] = tuple(
            tuple(tokenize(doc.content)) for doc in self._documents
        )
        self._doc_lengths = np.array([len(t) for t in self._tokens], dtype=np.float64)

        self._doc_frequencies: Dict[str, int] = {}
        postings: Dict[str, Tuple[List[int], List[int]]] = {}
        for doc_idx, tokens in enumerate(self._tokens):
            for term, count in Counter(tokens).items():
                self._doc_frequencies[term] = self._doc_frequencies.get(term, 0) + 1
                doc_ids, freqs = postings.setdefault(term, ([], []))
                doc_ids.append(doc_idx)
                freqs.append(count)

        self._postings: Dict[str, Tuple[np.ndarray, np.ndarray]] = {
            term: (np.array(doc_ids, dtype=np.intp), np.array(freqs, dtype=np.float64))
            for term, (doc_ids, freqs) in postings.items()
        }

        total_length = float(self._doc_lengths.sum())
        avg = total_length / len(self._documents)
        # Never zero: documents with no usable tokens would otherwise divide by zero
        self._avg_doc_length = avg if avg > 0 else 1.0

        log_debug(
            "Built BM25 index",
            documents=len(self._documents),
            terms=len(self._doc_frequencies),
            avg_doc_length=round(self._avg_doc_length, 2),
        )

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> Tuple[Document, ...]:
        return self._documents

    @property
    def avg_doc_length(self) -> float:
        return self._avg_doc_length

    def document_frequency(self, term: str) -> int:
        """Number of documents containing ``term`` at least once."""
        return self._doc_frequencies.get(term, 0)

    def idf(self, term: str) -> float:
        n = len(self._documents)
        df = self._doc_frequencies.get(term, 0)
        return math.log((n - df + 0.5) / (df + 0.5) + 1)

    def _score_all(self, query_tokens: Sequence[str]) -> np.ndarray:
        scores = np.zeros(len(self._documents), dtype=np.float64)
        for term in query_tokens:
            posting = self._postings.get(term)
            if posting is None:
                continue
            doc_ids, tf = posting
            norm = K1 * (1 - B + B * (self._doc_lengths[doc_ids] / self._avg_doc_length))
            scores[doc_ids] += self.idf(term) * (tf * (K1 + 1)) / (tf + norm)
        return scores

    def score(self, query: str, position: int) -> float:
        """BM25 score of the document at ``position`` for ``query``."""
        return float(self._score_all(tokenize(query))[position])

    def search(self, query: str, max_results: int = 3) -> List[ScoredDocument]:
        """
        Rank documents for ``query``.

        Only positive scores are returned, highest first. Ties keep document
        order. An empty or punctuation-only query yields an empty list.

        Args:
            query: Raw query text
            max_results: Maximum number of documents to return

        Returns:
            List of ScoredDocument, at most ``max_results`` long
        """
        query_tokens = tokenize(query)
        if not query_tokens or max_results < 1:
            return []

        scores = self._score_all(query_tokens)
        order = np.argsort(-scores, kind="stable")

        results: List[ScoredDocument] = []
        for idx in order[:max_results]:
            score = float(scores[idx])
            if score <= 0:
                break
            results.append(ScoredDocument(document=self._documents[idx], score=score))
        return results
