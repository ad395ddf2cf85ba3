"""Scrapers turning status query results into metric samples."""

from mysqlmetrics.core.scrapers.base import Scraper, emit, query_with_fallback
from mysqlmetrics.core.scrapers.master_status import MasterStatusScraper
from mysqlmetrics.core.scrapers.registry import ScraperRegistry, default_registry
from mysqlmetrics.core.scrapers.slave_status import SlaveStatusScraper

__all__ = [
    "MasterStatusScraper",
    "Scraper",
    "ScraperRegistry",
    "SlaveStatusScraper",
    "default_registry",
    "emit",
    "query_with_fallback",
]
