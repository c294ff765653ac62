from collections import deque
from typing import Deque, NamedTuple, Optional


class FrontierEntry(NamedTuple):
    """A URL waiting to be fetched and the link distance from the seed."""
    url: str
    depth: int


class Frontier:
    """FIFO queue of (url, depth) pairs driving a breadth-first crawl.

    Not thread-safe: only the orchestrator thread touches it.
    """

    def __init__(self):
        self._queue: Deque[FrontierEntry] = deque()

    def push(self, url: str, depth: int) -> None:
        self._queue.append(FrontierEntry(url, depth))

    def pop(self) -> Optional[FrontierEntry]:
        if not self._queue:
            return None
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
