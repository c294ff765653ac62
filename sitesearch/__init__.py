"""SiteSearch: crawl a single site, index it, answer ranked keyword queries."""

__version__ = "0.1.0"
