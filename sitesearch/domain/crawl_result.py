"""Crawl result data model."""
from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class CrawlResult:
    """One successfully fetched and parsed page.

    `links` holds only same-site, fragment-stripped absolute URLs.
    """

    url: str
    title: str = ""
    body_text: str = ""
    links: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # accept any iterable of links but always store an immutable set
        if not isinstance(self.links, frozenset):
            object.__setattr__(self, "links", frozenset(self.links))
