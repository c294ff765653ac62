from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter

from sitesearch.domain.http_response import HttpResponse
from sitesearch.exceptions import NetworkError


def create_session(pool_maxsize: int = 10) -> requests.Session:
    """Session whose per-host connection pool fits `pool_maxsize` concurrent fetches."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=10, pool_maxsize=max(int(pool_maxsize), 1))
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    `http_client` is a `requests.get`-compatible callable. Passing the bound
    `get` of a shared `requests.Session` gives every concurrent fetch the same
    connection pool; tests pass a stub instead of patching.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: Optional[float] = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """Fetch URL and return response with status code, body text, and Content-Type."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
            text = resp.text
        except requests.exceptions.RequestException as e:
            raise NetworkError(url, e) from e

        # Extract Content-Type if response has headers; let real exceptions bubble up.
        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return HttpResponse(resp.status_code, text, ct)
