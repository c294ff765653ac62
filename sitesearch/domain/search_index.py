"""In-memory search index: term -> document URL -> term count."""
from dataclasses import dataclass, field
from typing import Dict, Set


@dataclass
class SearchIndex:
    """Term-frequency inverted index built once per crawl.

    `term_tf[term][url]` is the number of times `term` occurs in the body
    text of the page at `url`; `doc_count` is the number of pages indexed.
    Treated as read-only once built.
    """

    term_tf: Dict[str, Dict[str, int]] = field(default_factory=dict)
    doc_count: int = 0

    def as_inverted(self) -> Dict[str, Set[str]]:
        """Simplified view: term -> set of URLs containing it."""
        return {term: set(postings) for term, postings in self.term_tf.items()}

    def postings(self, term: str) -> Dict[str, int]:
        return self.term_tf.get(term, {})

    def document_frequency(self, term: str) -> int:
        return len(self.term_tf.get(term, {}))

    @property
    def term_count(self) -> int:
        return len(self.term_tf)

    def is_empty(self) -> bool:
        return self.doc_count == 0
