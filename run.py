import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from sitesearch.api.server import create_app
from sitesearch.container import Container, ENV
from sitesearch.domain.crawl_config import CrawlConfig
from sitesearch.exceptions import ConcurrencyError, PersistenceError, UrlParseError
from sitesearch.services.search_service import SearchService

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitesearch",
        description="Crawl a site, build an inverted index, serve a search API",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    crawl = sub.add_parser("crawl", help="Crawl a URL and save its index to a file")
    crawl.add_argument("-u", "--url", required=True, help="Start URL (same host only)")
    crawl.add_argument("-n", "--max-pages", type=int, default=None, help="Max pages to crawl")
    crawl.add_argument("-d", "--max-depth", type=int, default=None, help="Max link hops from the start URL")
    crawl.add_argument("-c", "--max-concurrency", type=int, default=None, help="Max simultaneous fetches")
    crawl.add_argument("-t", "--timeout", type=float, default=None, help="Per-request timeout in seconds (0 disables)")
    crawl.add_argument("-o", "--output", default=None, help="Index file to write")

    serve = sub.add_parser("serve", help="Load an index file and start the search API")
    serve.add_argument("-i", "--index", default=None, help="Index file to read")
    serve.add_argument("-p", "--port", type=int, default=DEFAULT_PORT)
    serve.add_argument("--host", default=DEFAULT_HOST)
    return parser


def run_crawl(args, container: Container) -> int:
    if args.timeout is not None:
        container.config.HTTP_TIMEOUT.from_value(args.timeout if args.timeout > 0 else None)
    output = args.output or container.config.SITESEARCH_INDEX_PATH()
    try:
        crawl_config = CrawlConfig.from_overrides(
            args.max_pages,
            args.max_depth,
            args.max_concurrency,
            defaults=container.crawl_config(),
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    # the shared session's connection pool is sized from this
    container.config.SITESEARCH_MAX_CONCURRENCY.from_value(crawl_config.max_concurrency)

    try:
        results = container.crawl_orchestrator(config=crawl_config).crawl(args.url)
        index = container.index_builder().build(results)
        container.index_store().save(index, output)
    except (UrlParseError, ConcurrencyError, PersistenceError) as e:
        logger.error("Crawl failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        container.http_session().close()

    print(f"Crawled {len(results)} pages, index saved to {output}")
    return 0


def run_serve(args, container: Container) -> int:
    index_path = args.index or container.config.SITESEARCH_INDEX_PATH()
    try:
        index = container.index_store().load(index_path)
    except PersistenceError as e:
        logger.error("Could not load index: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = create_app(SearchService(index), container_env=ENV)
    print(f"Serving {index.doc_count} documents on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    container = container or Container()
    logging.basicConfig(
        level=container.config.LOG_LEVEL() or "INFO",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "crawl":
        return run_crawl(args, container)
    return run_serve(args, container)


if __name__ == '__main__':
    sys.exit(main())
