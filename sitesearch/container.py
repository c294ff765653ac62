"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from sitesearch import config as env
from sitesearch.domain.crawl_config import CrawlConfig
from sitesearch.services.crawl_orchestrator import CrawlOrchestrator
from sitesearch.services.fetcher import HttpServiceFetcher
from sitesearch.services.http_service import HttpService, create_session
from sitesearch.services.index_builder import IndexBuilder
from sitesearch.services.index_store import IndexStore
from sitesearch.services.page_extractor import PageExtractor
from sitesearch.services.tokenizer import tokenize


# Environment variables used by the container (read via `sitesearch.config` helpers).
#
# USER_AGENT (str, default: "SiteSearch/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (float seconds | optional, default: 10)
#   Per-request timeout. "0", "none" or "off" disables it, which lets a hung
#   fetch hold its concurrency permit forever.
#
# SITESEARCH_MAX_PAGES (int, default: 50)
# SITESEARCH_MAX_DEPTH (int, default: 3)
# SITESEARCH_MAX_CONCURRENCY (int, default: 5)
#   Default crawl limits; CLI flags override them per run. The concurrency
#   limit also sizes the shared session's connection pool.
#
# SITESEARCH_INDEX_PATH (str, default: "index.json")
#   Where `run.py crawl` writes and `run.py serve` reads the index.
#
# LOG_LEVEL (str, default: "INFO")
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "SITESEARCH_MAX_PAGES": env.DEFAULT_MAX_PAGES,
    "SITESEARCH_MAX_DEPTH": env.DEFAULT_MAX_DEPTH,
    "SITESEARCH_MAX_CONCURRENCY": env.DEFAULT_MAX_CONCURRENCY,
    "SITESEARCH_INDEX_PATH": env.INDEX_PATH,
    "LOG_LEVEL": env.LOG_LEVEL,
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SiteSearch."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # One session for the whole crawl so fetch threads share its connection pool,
    # sized to the number of simultaneous fetches
    http_session = providers.Singleton(
        create_session,
        pool_maxsize=config.SITESEARCH_MAX_CONCURRENCY.as_(int),
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=http_session.provided.get,
        timeout=config.HTTP_TIMEOUT,
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    page_extractor = providers.Singleton(
        PageExtractor
    )

    crawl_config = providers.Factory(
        CrawlConfig,
        max_pages=config.SITESEARCH_MAX_PAGES.as_(int),
        max_depth=config.SITESEARCH_MAX_DEPTH.as_(int),
        max_concurrency=config.SITESEARCH_MAX_CONCURRENCY.as_(int),
        fetch_timeout=config.HTTP_TIMEOUT,
    )

    crawl_orchestrator = providers.Factory(
        CrawlOrchestrator,
        fetcher=page_fetcher,
        page_extractor=page_extractor,
        config=crawl_config,
    )

    index_builder = providers.Singleton(
        IndexBuilder,
        tokenizer=providers.Object(tokenize),
    )

    index_store = providers.Singleton(
        IndexStore
    )
