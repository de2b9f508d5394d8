# ============================================
# invertedIndex.py - Build Inverted Index
# ============================================
# This builds the inverted index from raw document tokens.
# The inverted index maps each keyword to the documents it appears in,
# together with how often it appears there.
#
# Example:
# {
#     "machine": [("doc4.txt", 7), ("doc1.txt", 3), ("doc2.txt", 3)],
#     "learning": [...]
# }
#
# Each list is kept in DESCENDING order of frequency. Documents with equal
# frequency stay in the order they were indexed. The lists are never sorted
# in bulk: every new occurrence is appended and then moved into place by
# insert_last_occurrence().

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from errors import IndexFrozenError
from preprocessor import get_keyword, normalize_noise_words

log = logging.getLogger("lse.index")


class Occurrence:
    """
    How many times a keyword shows up in one document.
    frequency is only bumped while that document is being scanned.
    """

    __slots__ = ("document", "frequency")

    def __init__(self, document: str, frequency: int = 1):
        self.document = document
        self.frequency = frequency

    def __str__(self):
        return f"({self.document},{self.frequency})"

    def __repr__(self):
        return f"Occurrence({self.document!r}, {self.frequency})"

    def __eq__(self, other):
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.document == other.document and self.frequency == other.frequency

    __hash__ = None


# ============================================
# BINARY SEARCH INSERTION
# ============================================

def find_insert_position(occs: Sequence[Occurrence], frequency: int, high: int) -> Tuple[int, List[int]]:
    """
    Binary search over occs[0..high] (descending frequency) for the spot where
    an occurrence with the given frequency belongs.

    The spot is just after the last entry whose frequency is >= the new one,
    so equal frequencies keep their arrival order.

    Returns (index, probes) where probes are the midpoints looked at.
    """
    low = 0
    probes = []
    while low <= high:
        mid = (low + high) // 2
        probes.append(mid)
        if frequency <= occs[mid].frequency:
            # new one is not bigger -> it goes somewhere right of mid
            low = mid + 1
        else:
            high = mid - 1
    return low, probes


def insert_last_occurrence(occs: List[Occurrence]) -> Optional[List[int]]:
    """
    Moves the last occurrence in the list to its correct place.
    Elements 0..n-2 must already be in descending order of frequency.

    Returns the midpoint indexes checked by the binary search, or None
    when the list has a single element (nothing to search).
    The search does not stop on an equal frequency, it keeps probing to the
    right of equal entries, so [5, 3, 1] + 3 probes [1, 2] rather than [1].
    """
    if len(occs) < 2:
        return None

    last = len(occs) - 1
    position, probes = find_insert_position(occs, occs[last].frequency, last - 1)
    if position != last:
        occs.insert(position, occs.pop())
    return probes


# ============================================
# PER-DOCUMENT SCAN
# ============================================

def load_keywords_from_document(doc_id: str, raw_tokens: Iterable[str],
                                noise_words: Iterable[str] = frozenset()) -> Dict[str, Occurrence]:
    """
    Counts the keywords of a single document.

    Input: "doc1.txt", ["The", "cat", "sat.", "Cat!"]
    Output: {"cat": Occurrence("doc1.txt", 2), "sat": Occurrence("doc1.txt", 1)}

    noise_words may be in any case.
    """
    noise_words = normalize_noise_words(noise_words)
    doc_keys = {}
    for token in raw_tokens:
        keyword = get_keyword(token, noise_words)
        if keyword is None:
            continue
        occurrence = doc_keys.get(keyword)
        if occurrence is None:
            doc_keys[keyword] = Occurrence(doc_id, 1)
        else:
            occurrence.frequency += 1
    return doc_keys


def merge_keywords(keywords_index: Dict[str, List[Occurrence]], doc_keywords: Dict[str, Occurrence]) -> None:
    """
    Merges one document's keywords into the master index, each occurrence
    going to its sorted place in that keyword's list.
    """
    for keyword, occurrence in doc_keywords.items():
        occs = keywords_index.get(keyword)
        if occs is None:
            # first document with this keyword, nothing to reposition
            keywords_index[keyword] = [occurrence]
        else:
            occs.append(occurrence)
            insert_last_occurrence(occs)


# ============================================
# THE INDEX
# ============================================

class InvertedIndex:
    """
    Owns the keyword -> occurrence list map.

    Documents are added one after another during the build phase. freeze()
    ends that phase; after it the index is read-only and safe to share
    between queries.
    """

    def __init__(self, noise_words: Iterable[str] = ()):
        self.noise_words = normalize_noise_words(noise_words)
        self._index: Dict[str, List[Occurrence]] = {}
        self._documents: Dict[str, int] = {}
        self._frozen = False

    # ---- build phase ----

    def add_document(self, doc_id: str, raw_tokens: Iterable[str]) -> Dict[str, Occurrence]:
        """Scans one document and merges its keywords. Returns the per-document counts."""
        if self._frozen:
            raise IndexFrozenError(f"Index is frozen, cannot add {doc_id}")
        if doc_id in self._documents:
            raise ValueError(f"Document {doc_id} is already indexed")

        doc_keys = load_keywords_from_document(doc_id, raw_tokens, self.noise_words)
        merge_keywords(self._index, doc_keys)
        self._documents[doc_id] = len(doc_keys)
        log.debug("Indexed %s (%d keywords)", doc_id, len(doc_keys))
        return doc_keys

    def make_index(self, documents: Iterable[str], token_stream: Callable[[str], Iterable[str]]) -> "InvertedIndex":
        """
        Indexes every document, in the order given.

        token_stream(doc_id) must return the raw tokens of that document. Any
        exception it raises aborts the run and the index is left exactly as
        it was before the call.
        """
        if self._frozen:
            raise IndexFrozenError("Index is frozen, cannot make index")

        staging = InvertedIndex(self.noise_words)
        staging._index = {keyword: list(occs) for keyword, occs in self._index.items()}
        staging._documents = dict(self._documents)

        for doc_id in documents:
            if doc_id in staging._documents:
                log.warning("Skipping %s, listed more than once", doc_id)
                continue
            staging.add_document(doc_id, token_stream(doc_id))

        self._index = staging._index
        self._documents = staging._documents
        log.info("Index built: %d documents, %d unique keywords", len(self._documents), len(self._index))
        return self

    def freeze(self) -> "InvertedIndex":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---- read side ----

    def occurrences(self, keyword: str) -> Tuple[Occurrence, ...]:
        # unknown keyword -> empty, never an error
        return tuple(self._index.get(keyword, ()))

    def keywords(self) -> List[str]:
        return sorted(self._index)

    @property
    def documents(self) -> Tuple[str, ...]:
        return tuple(self._documents)

    def __contains__(self, keyword):
        return keyword in self._index

    def __len__(self):
        return len(self._index)

    def stats(self) -> Dict[str, int]:
        return {
            "unique_terms": len(self._index),
            "total_docs": len(self._documents),
            "total_occurrences": sum(len(occs) for occs in self._index.values()),
        }


def build_inverted_index(documents: Iterable[str], token_stream: Callable[[str], Iterable[str]],
                         noise_words: Iterable[str] = ()) -> InvertedIndex:
    """
    Builds and freezes a complete index in one go.
    If any document fails to load the exception propagates and no index is returned.
    """
    return InvertedIndex(noise_words).make_index(documents, token_stream).freeze()
