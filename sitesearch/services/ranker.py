"""Query evaluation over a `SearchIndex`: TF-IDF ranking and boolean AND search."""
import math
from typing import Callable, Dict, List, Optional, Set, Tuple

from sitesearch.domain.search_index import SearchIndex
from sitesearch.services.tokenizer import tokenize as default_tokenize


def idf(doc_count: int, document_frequency: int) -> float:
    """Smoothed inverse document frequency: ln((n + 1) / (df + 1)) + 1."""
    return math.log((doc_count + 1) / (document_frequency + 1)) + 1


def search_ranked(
    index: SearchIndex,
    query: str,
    tokenize: Callable[[str], List[str]] = default_tokenize,
) -> List[Tuple[str, float]]:
    """Return (url, score) pairs sorted by TF-IDF score, highest first.

    Each distinct query term adds tf * idf to every document containing it;
    terms missing from the index add nothing. Equal scores are ordered by URL.
    """
    terms = list(dict.fromkeys(tokenize(query)))
    if not terms or index.doc_count == 0:
        return []

    scores: Dict[str, float] = {}
    for term in terms:
        postings = index.postings(term)
        if not postings:
            continue
        weight = idf(index.doc_count, len(postings))
        for url, tf in postings.items():
            scores[url] = scores.get(url, 0.0) + tf * weight

    return sorted(scores.items(), key=lambda item: (-item[1], item[0]))


def search(
    index: SearchIndex,
    query: str,
    tokenize: Callable[[str], List[str]] = default_tokenize,
) -> List[str]:
    """Return the URLs containing every query term, sorted lexicographically."""
    terms = tokenize(query)
    if not terms:
        return []

    matches: Optional[Set[str]] = None
    for term in terms:
        urls = set(index.postings(term))
        matches = urls if matches is None else matches & urls
        if not matches:
            return []
    return sorted(matches)
