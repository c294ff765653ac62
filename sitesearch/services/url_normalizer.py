"""URL resolution and same-site checks used by the extractor and the crawler."""
import logging
from typing import Optional
from urllib.parse import quote, urldefrag, urljoin, urlsplit, urlunsplit

from sitesearch.exceptions import UrlParseError

logger = logging.getLogger(__name__)

CRAWLABLE_SCHEMES = ("http", "https")

# RFC 3986 sub-delims plus ':' and '@'; '%' keeps existing escapes intact
PATH_SAFE = "/%:@!$&'()*+,;="
QUERY_SAFE = PATH_SAFE + "?"


def _canonical(url: str) -> Optional[str]:
    """Return `url` without fragment, with lowercase scheme/host and a non-empty path.

    Characters that are not allowed in a path or query (spaces, quotes,
    non-ASCII, ...) are percent-encoded, so ``/a b`` and ``/a%20b`` give the
    same URL. Userinfo keeps its case.

    Returns None for anything that is not an absolute http(s) URL with a host.
    """
    try:
        defragged, _fragment = urldefrag(url)
        parts = urlsplit(defragged)
        # .port raises ValueError for out-of-range or non-numeric ports
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in CRAWLABLE_SCHEMES or not parts.hostname:
        return None
    userinfo, at, hostport = parts.netloc.rpartition("@")
    return urlunsplit((
        parts.scheme.lower(),
        userinfo + at + hostport.lower(),
        quote(parts.path or "/", safe=PATH_SAFE),
        quote(parts.query, safe=QUERY_SAFE),
        "",
    ))


def normalize(base: str, href: Optional[str]) -> Optional[str]:
    """Resolve `href` against `base` into an absolute, fragment-free URL.

    Returns None if `href` cannot be resolved into a crawlable http(s) URL
    (``mailto:``, ``javascript:``, malformed hosts or ports, ...).
    """
    if href is None:
        return None
    try:
        absolute = urljoin(base, href.strip())
    except ValueError:
        logger.debug("Skipping (unresolvable) %r relative to %s", href, base)
        return None
    return _canonical(absolute)


def same_site(a: str, b: str) -> bool:
    """True iff both URLs have exactly the same host (no subdomain folding)."""
    try:
        host_a = urlsplit(a).hostname
        host_b = urlsplit(b).hostname
    except ValueError:
        logger.debug("Error comparing hosts: a=%s, b=%s", a, b)
        return False
    return host_a is not None and host_a == host_b


def parse_seed(url: str) -> str:
    """Validate a crawl seed and return its canonical form.

    Raises `UrlParseError` when the seed is not an absolute http(s) URL.
    """
    if not isinstance(url, str) or not url.strip():
        raise UrlParseError(str(url), "empty URL")
    canonical = _canonical(url.strip())
    if canonical is None:
        raise UrlParseError(url)
    return canonical
