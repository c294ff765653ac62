"""
Tests for run.py main() with an injected container.
"""
import json
from unittest.mock import Mock, patch

import pytest
from dependency_injector import providers

from run import main
from sitesearch.container import Container
from sitesearch.domain.crawl_config import CrawlConfig
from sitesearch.domain.crawl_result import CrawlResult
from sitesearch.exceptions import ConcurrencyError, UrlParseError
from sitesearch.services.crawl_orchestrator import CrawlOrchestrator
from sitesearch.services.index_store import IndexStore

ROOT = "http://example.com/"


def test_container_creates_services():
    container = Container()
    container.config.USER_AGENT.from_value("TestBot/1.0")

    assert container.http_service().user_agent == "TestBot/1.0"
    assert container.page_fetcher() is container.page_fetcher()
    assert isinstance(container.crawl_orchestrator(), CrawlOrchestrator)
    assert isinstance(container.index_store(), IndexStore)


def test_container_crawl_config_follows_env_values():
    container = Container()
    container.config.SITESEARCH_MAX_PAGES.from_value(7)
    container.config.SITESEARCH_MAX_DEPTH.from_value(1)
    container.config.SITESEARCH_MAX_CONCURRENCY.from_value(2)
    container.config.HTTP_TIMEOUT.from_value(None)
    assert container.crawl_config() == CrawlConfig(max_pages=7, max_depth=1, max_concurrency=2, fetch_timeout=None)


def test_http_service_shares_one_session():
    container = Container()
    session = Mock()
    container.http_session.override(session)
    service = container.http_service()
    service.http_client("http://example.com/", headers={}, timeout=1)
    session.get.assert_called_once()


def _container_with_results(results):
    container = Container()
    orchestrator = Mock(crawl=Mock(return_value=results))
    container.crawl_orchestrator.override(orchestrator)
    container.http_session.override(Mock())
    return container, orchestrator


def test_crawl_command_writes_index(tmp_path, capsys):
    results = [
        CrawlResult(url=ROOT, body_text="hello world"),
        CrawlResult(url=ROOT + "b", body_text="hello again"),
    ]
    container, orchestrator = _container_with_results(results)
    output = tmp_path / "index.json"

    assert main(["crawl", "--url", ROOT, "-n", "10", "-o", str(output)], container=container) == 0

    orchestrator.crawl.assert_called_once_with(ROOT)
    data = json.loads(output.read_text())
    assert data["doc_count"] == 2
    assert data["term_tf"]["hello"] == {ROOT: 1, ROOT + "b": 1}
    assert "Crawled 2 pages" in capsys.readouterr().out


def test_crawl_command_empty_crawl_still_writes_index(tmp_path):
    container, _ = _container_with_results([])
    output = tmp_path / "index.json"
    assert main(["crawl", "-u", ROOT, "-o", str(output)], container=container) == 0
    assert json.loads(output.read_text()) == {"doc_count": 0, "term_tf": {}}


@pytest.mark.parametrize("error", [UrlParseError("nope"), ConcurrencyError(RuntimeError("x"))])
def test_crawl_command_fatal_errors_exit_nonzero(tmp_path, capsys, error):
    container = Container()
    container.crawl_orchestrator.override(Mock(crawl=Mock(side_effect=error)))
    container.http_session.override(Mock())
    output = tmp_path / "index.json"
    assert main(["crawl", "-u", "nope", "-o", str(output)], container=container) == 1
    assert not output.exists()
    assert "Error" in capsys.readouterr().err


def test_crawl_command_rejects_invalid_limits(tmp_path):
    container, _ = _container_with_results([])
    assert main(["crawl", "-u", ROOT, "-c", "0", "-o", str(tmp_path / "i.json")], container=container) == 2


def test_serve_loads_index_and_starts_uvicorn(tmp_path):
    path = tmp_path / "index.json"
    path.write_text(json.dumps({"hello": [ROOT]}))
    container = Container()

    with patch('run.uvicorn.run') as mock_uvicorn:
        assert main(["serve", "-i", str(path), "-p", "8123"], container=container) == 0

    assert mock_uvicorn.called
    assert mock_uvicorn.call_args.kwargs == {"host": "127.0.0.1", "port": 8123}


def test_serve_missing_index_exits_nonzero(tmp_path):
    with patch('run.uvicorn.run') as mock_uvicorn:
        assert main(["serve", "-i", str(tmp_path / "missing.json")], container=Container()) == 1
    assert not mock_uvicorn.called


def test_container_session_pool_fits_concurrency():
    container = Container()
    container.config.SITESEARCH_MAX_CONCURRENCY.from_value(24)
    adapter = container.http_session().get_adapter("https://example.com/")
    assert adapter._pool_maxsize == 24


def _container_with_orchestrator_factory():
    container = Container()
    orchestrator = Mock(crawl=Mock(return_value=[]))
    factory = Mock(return_value=orchestrator)
    container.crawl_orchestrator.override(providers.Callable(factory))
    container.http_session.override(Mock())
    container.config.SITESEARCH_MAX_PAGES.from_value(50)
    container.config.SITESEARCH_MAX_DEPTH.from_value(3)
    container.config.SITESEARCH_MAX_CONCURRENCY.from_value(5)
    container.config.HTTP_TIMEOUT.from_value(10.0)
    return container, factory


def test_crawl_command_flags_build_crawl_config(tmp_path):
    container, factory = _container_with_orchestrator_factory()
    argv = ["crawl", "-u", ROOT, "-n", "10", "-d", "1", "-c", "12", "-t", "2.5", "-o", str(tmp_path / "i.json")]

    assert main(argv, container=container) == 0

    factory.assert_called_once_with(
        config=CrawlConfig(max_pages=10, max_depth=1, max_concurrency=12, fetch_timeout=2.5)
    )
    assert container.config.SITESEARCH_MAX_CONCURRENCY() == 12


def test_crawl_command_unset_flags_use_configured_defaults(tmp_path):
    container, factory = _container_with_orchestrator_factory()

    assert main(["crawl", "-u", ROOT, "-o", str(tmp_path / "i.json")], container=container) == 0

    factory.assert_called_once_with(
        config=CrawlConfig(max_pages=50, max_depth=3, max_concurrency=5, fetch_timeout=10.0)
    )


def test_crawl_command_zero_timeout_disables_it(tmp_path):
    container, factory = _container_with_orchestrator_factory()

    assert main(["crawl", "-u", ROOT, "-t", "0", "-o", str(tmp_path / "i.json")], container=container) == 0

    assert factory.call_args.kwargs["config"].fetch_timeout is None
    assert container.config.HTTP_TIMEOUT() is None
