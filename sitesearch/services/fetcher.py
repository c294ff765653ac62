from __future__ import annotations

import logging
from typing import Protocol

from sitesearch.exceptions import NetworkError
from sitesearch.services.http_service import HttpService

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Fetch a URL and return its raw HTML.

    Implementations raise `NetworkError` for anything that should make the
    crawler skip the page. They must be safe to call from several threads.
    """

    def fetch(self, url: str) -> str: ...


class HttpServiceFetcher:
    def __init__(self, http_service: HttpService):
        self._http_service = http_service

    def fetch(self, url: str) -> str:
        response = self._http_service.fetch(url)
        if not response.ok:
            raise NetworkError(url, reason=f"HTTP status {response.status_code}")
        logger.debug("Fetched %s -> status %s (%s)", url, response.status_code, response.content_type)
        return response.text
