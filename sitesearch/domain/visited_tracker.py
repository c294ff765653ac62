from typing import Iterator, Set


class VisitedTracker:
    """
    Tracks which URLs have been dispatched for fetching during a crawl.

    Entries are never evicted: once marked, a URL stays visited for the rest
    of the run, which is what guarantees each URL is fetched at most once.
    Owned by the orchestrator thread, so no locking.
    """

    def __init__(self):
        self._visited: Set[str] = set()

    def mark(self, url: str) -> None:
        """Mark a URL as visited."""
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        return url in self._visited

    def __contains__(self, url: str) -> bool:
        return url in self._visited

    def __len__(self) -> int:
        return len(self._visited)

    def __iter__(self) -> Iterator[str]:
        return iter(self._visited)
