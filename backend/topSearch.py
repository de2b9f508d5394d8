# ============================================
# topSearch.py - Top 5 Search For "kw1 or kw2"
# ============================================
# Merges the two keywords' occurrence lists into one ranked list of documents.

from typing import List, Mapping, Optional, Sequence, Union

from invertedIndex import InvertedIndex, Occurrence

TOP_N = 5

IndexLike = Union[InvertedIndex, Mapping[str, Sequence[Occurrence]]]


def _occurrences_for(index: IndexLike, keyword: str) -> Sequence[Occurrence]:
    if isinstance(index, InvertedIndex):
        return index.occurrences(keyword)
    return index.get(keyword) or ()


def top5search(index: IndexLike, kw1: str, kw2: str, limit: int = TOP_N) -> Optional[List[str]]:
    """
    Search result for "kw1 or kw2".

    Walks both occurrence lists (already in descending frequency) side by
    side and keeps taking the higher frequency. On a tie kw1 wins. A document
    is listed once even if both keywords occur in it.

    index: an InvertedIndex or a plain {keyword: [Occurrence, ...]} mapping
    Returns: up to `limit` document ids, or None if neither keyword matched.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    first = _occurrences_for(index, kw1)
    second = _occurrences_for(index, kw2)

    results: List[str] = []
    seen = set()
    i = j = 0

    while len(results) < limit and (i < len(first) or j < len(second)):
        if j >= len(second) or (i < len(first) and first[i].frequency >= second[j].frequency):
            candidate = first[i]
            i += 1
        else:
            candidate = second[j]
            j += 1

        # already added through the other keyword -> skip, cursor still moves
        if candidate.document not in seen:
            seen.add(candidate.document)
            results.append(candidate.document)

    if not results:
        return None
    return results
