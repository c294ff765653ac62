import logging
from typing import Callable, List, NamedTuple, Optional, Protocol

from bs4 import BeautifulSoup

from sitesearch.exceptions import PageParseError
from sitesearch.services.url_normalizer import normalize, same_site

logger = logging.getLogger(__name__)


class ExtractedPage(NamedTuple):
    title: str
    body_text: str
    links: List[str]


class Extractor(Protocol):
    def extract(self, html: str, base_url: str) -> ExtractedPage: ...


class PageExtractor:
    """Pull the title, visible body text and same-site links out of an HTML page.

    Links may contain duplicates; deduplication happens in the crawler's
    visited set.
    """

    # never part of the readable body text
    NON_TEXT_TAGS = ("script", "style", "noscript", "template")

    def __init__(
        self,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract(self, html: Optional[str], base_url: str) -> ExtractedPage:
        if not html:
            return ExtractedPage("", "", [])
        try:
            soup = self._soup_factory(html)
            links = self._extract_links(soup, base_url)
            title = soup.title.get_text(strip=True) if soup.title else ""
            body_text = self._extract_body_text(soup)
        except Exception as e:
            raise PageParseError(base_url, e) from e
        return ExtractedPage(title, body_text, links)

    def _extract_body_text(self, soup: BeautifulSoup) -> str:
        # html.parser does not synthesize <body>; fall back to everything outside <head>
        body = soup.body
        unwanted = self.NON_TEXT_TAGS
        if body is None:
            body = soup
            unwanted = unwanted + ("head", "title")
        for tag in unwanted:
            for element in body.find_all(tag):
                element.decompose()
        return body.get_text(separator=" ", strip=True)

    def _extract_links(self, soup: BeautifulSoup, base_url: str) -> List[str]:
        links = []
        for a in soup.find_all("a", href=True):
            absolute = normalize(base_url, a.get("href"))
            if absolute is None:
                continue
            if not same_site(base_url, absolute):
                logger.debug("Skipping (external) %s -> not same host as %s", absolute, base_url)
                continue
            links.append(absolute)
        return links
