"""Custom exceptions for SiteSearch services."""
from typing import Optional


class SiteSearchError(Exception):
    """Base class for every error raised by SiteSearch."""


class UrlParseError(SiteSearchError):
    """Raised when a URL cannot be parsed or resolved.

    Fatal when it concerns the crawl seed; an unresolvable href only drops that link.
    """

    def __init__(self, url: str, reason: str = "not a valid absolute http(s) URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot parse URL {url!r}: {reason}")


class NetworkError(SiteSearchError):
    """Raised when a page fetch fails (transport error, timeout or non-2xx status)."""

    def __init__(self, url: str, original: Optional[Exception] = None, reason: Optional[str] = None):
        self.url = url
        self.original = original
        self.reason = reason or str(original)
        super().__init__(f"HTTP fetch failed for {url}: {self.reason}")


class PageParseError(SiteSearchError):
    """Raised when fetched HTML cannot be turned into a crawl result."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"Could not parse page {url}: {original}")


class ConcurrencyError(SiteSearchError):
    """Raised when a crawl task fails unexpectedly; aborts the whole crawl."""

    def __init__(self, original: BaseException, url: Optional[str] = None):
        self.original = original
        self.url = url
        where = f" while crawling {url}" if url else ""
        super().__init__(f"Crawl task failed{where}: {original!r}")


class PersistenceError(SiteSearchError):
    """Raised when the index file cannot be read, written or parsed."""

    def __init__(self, path: str, original: Optional[Exception] = None, reason: Optional[str] = None):
        self.path = path
        self.original = original
        self.reason = reason or str(original)
        super().__init__(f"Index file {path}: {self.reason}")
