import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional

from sitesearch import config as env
from sitesearch.domain.crawl_config import CrawlConfig
from sitesearch.domain.crawl_result import CrawlResult
from sitesearch.domain.frontier import Frontier, FrontierEntry
from sitesearch.domain.visited_tracker import VisitedTracker
from sitesearch.exceptions import ConcurrencyError, NetworkError, PageParseError
from sitesearch.services.fetcher import Fetcher, HttpServiceFetcher
from sitesearch.services.http_service import HttpService, create_session
from sitesearch.services.page_extractor import Extractor, PageExtractor
from sitesearch.services.url_normalizer import parse_seed, same_site

logger = logging.getLogger(__name__)


class CrawlOrchestrator:
    """Bounded-concurrency breadth-first crawl of a single site.

    The thread calling `crawl()` is the only one that touches the frontier,
    the visited set and the result list. Fetch+extract work runs on a thread
    pool; each task holds one of `max_concurrency` permits while it runs.

    Results come back in completion order, not frontier order.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        page_extractor: Extractor,
        config: Optional[CrawlConfig] = None,
    ):
        self.fetcher = fetcher
        self.page_extractor = page_extractor
        self.config = config or CrawlConfig()

    def crawl(self, start_url: str) -> List[CrawlResult]:
        """Crawl from `start_url` and return every page fetched successfully.

        Raises `UrlParseError` for a malformed seed and `ConcurrencyError`
        if a task fails in a way other than a fetch or parse error.
        """
        seed = parse_seed(start_url)
        cfg = self.config

        frontier = Frontier()
        frontier.push(seed, 0)
        visited = VisitedTracker()
        results: List[CrawlResult] = []
        in_flight: Dict[Future, FrontierEntry] = {}
        permits = threading.BoundedSemaphore(cfg.max_concurrency)

        logger.info(
            "Starting crawl of %s (max_pages=%s, max_depth=%s, max_concurrency=%s)",
            seed, cfg.max_pages, cfg.max_depth, cfg.max_concurrency,
        )
        with ThreadPoolExecutor(max_workers=cfg.max_concurrency, thread_name_prefix="sitesearch-fetch") as executor:
            while True:
                while len(results) + len(in_flight) < cfg.max_pages:
                    entry = frontier.pop()
                    if entry is None:
                        break
                    if entry.depth > cfg.max_depth:
                        logger.debug("Skipping (max depth reached) %s at depth %s", entry.url, entry.depth)
                        continue
                    if visited.is_visited(entry.url):
                        logger.debug("Skipping (visited) %s", entry.url)
                        continue
                    visited.mark(entry.url)
                    future = self._dispatch(executor, permits, entry)
                    in_flight[future] = entry

                if not in_flight:
                    break

                done, _pending = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    entry = in_flight.pop(future)
                    result = self._collect(future, entry)
                    if result is None:
                        continue
                    results.append(result)
                    for link in sorted(result.links):
                        if visited.is_visited(link):
                            continue
                        if not same_site(seed, link):
                            logger.debug("Skipping (external) %s -> not same host as %s", link, seed)
                            continue
                        frontier.push(link, entry.depth + 1)

        logger.info("Crawl of %s finished: %d pages fetched, %d URLs dispatched", seed, len(results), len(visited))
        return results

    def _dispatch(self, executor: ThreadPoolExecutor, permits: threading.BoundedSemaphore, entry: FrontierEntry) -> Future:
        # blocks while every permit is held by a running task
        permits.acquire()
        try:
            return executor.submit(self._fetch_page, entry.url, permits)
        except RuntimeError as e:
            permits.release()
            raise ConcurrencyError(e, entry.url) from e

    def _fetch_page(self, url: str, permits: threading.BoundedSemaphore) -> CrawlResult:
        try:
            html = self.fetcher.fetch(url)
            page = self.page_extractor.extract(html, url)
            return CrawlResult(url=url, title=page.title, body_text=page.body_text, links=page.links)
        finally:
            permits.release()

    def _collect(self, future: Future, entry: FrontierEntry) -> Optional[CrawlResult]:
        """Return the task's result, or None if the page should be skipped."""
        try:
            result = future.result()
        except NetworkError as e:
            logger.warning("Fetch failed for %s: %s", entry.url, e)
            return None
        except PageParseError as e:
            logger.warning("Parse failed for %s: %s", entry.url, e)
            return None
        except Exception as e:
            logger.error("Crawl task for %s failed: %s", entry.url, e, exc_info=True)
            raise ConcurrencyError(e, entry.url) from e
        logger.info("Fetched %s (depth %s) -> %d links", entry.url, entry.depth, len(result.links))
        return result


def crawl(
    start_url: str,
    max_pages: Optional[int] = None,
    max_depth: Optional[int] = None,
    max_concurrency: Optional[int] = None,
    *,
    fetcher: Optional[Fetcher] = None,
    page_extractor: Optional[Extractor] = None,
) -> List[CrawlResult]:
    """Crawl `start_url` with the given limits; unset limits come from the environment."""
    cfg = CrawlConfig.from_overrides(
        max_pages,
        max_depth,
        max_concurrency,
        defaults=CrawlConfig(
            max_pages=env.DEFAULT_MAX_PAGES,
            max_depth=env.DEFAULT_MAX_DEPTH,
            max_concurrency=env.DEFAULT_MAX_CONCURRENCY,
            fetch_timeout=env.HTTP_TIMEOUT,
        ),
    )
    extractor = page_extractor or PageExtractor()
    if fetcher is not None:
        return CrawlOrchestrator(fetcher=fetcher, page_extractor=extractor, config=cfg).crawl(start_url)

    with create_session(cfg.max_concurrency) as session:
        http_service = HttpService(env.USER_AGENT, http_client=session.get, timeout=cfg.fetch_timeout)
        orchestrator = CrawlOrchestrator(
            fetcher=HttpServiceFetcher(http_service),
            page_extractor=extractor,
            config=cfg,
        )
        return orchestrator.crawl(start_url)
