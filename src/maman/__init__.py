"""
Single-domain web spider that pushes every fetched page to a Redis work queue
as a background job.
"""
from maman.config import SpiderConfig
from maman.core import CrawlStats, Spider, SpiderState
from maman.page import Page, build_page, extract_links, to_job

__version__ = "0.1.0"
__all__ = [
    "CrawlStats",
    "Page",
    "Spider",
    "SpiderConfig",
    "SpiderState",
    "build_page",
    "extract_links",
    "to_job",
]
