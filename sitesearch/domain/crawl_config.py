from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_PAGES = 50
DEFAULT_MAX_DEPTH = 3
DEFAULT_MAX_CONCURRENCY = 5
DEFAULT_FETCH_TIMEOUT = 10.0


@dataclass(frozen=True)
class CrawlConfig:
    """Limits for a single crawl run.

    Passed explicitly to the orchestrator so that several crawls with
    different limits can run side by side.

    `fetch_timeout` bounds each HTTP request only. A fetch that blocks
    somewhere else keeps its concurrency permit for as long as it blocks;
    the orchestrator has no timeout of its own.
    """

    max_pages: int = DEFAULT_MAX_PAGES
    max_depth: int = DEFAULT_MAX_DEPTH
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    fetch_timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT

    def __post_init__(self):
        if self.max_pages is None or int(self.max_pages) < 0:
            raise ValueError(f"max_pages must be >= 0, got {self.max_pages!r}")
        if self.max_depth is None or int(self.max_depth) < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth!r}")
        if self.max_concurrency is None or int(self.max_concurrency) < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {self.max_concurrency!r}")
        if self.fetch_timeout is not None and float(self.fetch_timeout) <= 0:
            raise ValueError(f"fetch_timeout must be positive or None, got {self.fetch_timeout!r}")

    @classmethod
    def from_overrides(
        cls,
        max_pages: Optional[int] = None,
        max_depth: Optional[int] = None,
        max_concurrency: Optional[int] = None,
        *,
        defaults: Optional["CrawlConfig"] = None,
    ) -> "CrawlConfig":
        """Build a config where every `None` argument falls back to `defaults`."""
        base = defaults or cls()
        return cls(
            max_pages=base.max_pages if max_pages is None else max_pages,
            max_depth=base.max_depth if max_depth is None else max_depth,
            max_concurrency=base.max_concurrency if max_concurrency is None else max_concurrency,
            fetch_timeout=base.fetch_timeout,
        )
