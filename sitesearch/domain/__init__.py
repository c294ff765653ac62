"""Domain objects for SiteSearch - explicit re-exports to satisfy linters."""
from .crawl_config import CrawlConfig as CrawlConfig
from .crawl_result import CrawlResult as CrawlResult
from .frontier import Frontier as Frontier, FrontierEntry as FrontierEntry
from .search_index import SearchIndex as SearchIndex
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = ["CrawlConfig", "CrawlResult", "Frontier", "FrontierEntry", "SearchIndex", "VisitedTracker"]
