"""
Crawl controller: frontier state and the fetch/extract/publish loop.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Set

from maman.config import SpiderConfig
from maman.fetch import Fetcher, Response
from maman.page import Page, build_page, extract_links, to_job
from maman.publisher import PublishError, RedisQueuePublisher
from maman.urls import canonical, is_absolute, strip_fragment

logger = logging.getLogger(__name__)


class SupportsFetch(Protocol):
    def fetch(self, url: str) -> Optional[Response]: ...


class SupportsPush(Protocol):
    def push(self, queue: str, job: dict) -> None: ...


class SpiderState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during a crawl for the summary line."""
    pages_visited: int = 0
    links_discovered: int = 0
    skipped_visited: int = 0
    fetch_errors: int = 0
    publish_errors: int = 0

    def summary(self) -> str:
        return (
            f"Visited: {self.pages_visited} | Links: {self.links_discovered} | "
            f"Skipped: {self.skipped_visited} | Fetch errors: {self.fetch_errors} | "
            f"Publish errors: {self.publish_errors}"
        )


class Spider:
    """
    Depth-first crawler over a single domain.

    Discovered links go onto a LIFO stack; visited status is checked when a
    URL is popped, not when it is pushed, so the stack may hold duplicates.
    Every successfully fetched page is published as a job on the queue.
    """

    def __init__(
        self,
        base_url: str,
        config: Optional[SpiderConfig] = None,
        fetcher: Optional[SupportsFetch] = None,
        publisher: Optional[SupportsPush] = None,
    ) -> None:
        self.base_url = base_url
        self.config = config or SpiderConfig()
        self.fetcher = fetcher or Fetcher(user_agent=self.config.user_agent, timeout=self.config.timeout)
        self.publisher = publisher or RedisQueuePublisher(self.config.redis_url)
        self.queue_name = self.config.queue_name

        self.visited_urls: List[str] = []
        self.unvisited_urls: List[str] = []
        self._visited: Set[str] = set()
        self.state = SpiderState.IDLE
        self.stats = CrawlStats()

    def is_visited(self, url: str) -> bool:
        return url in self._visited

    def crawl(self) -> CrawlStats:
        """
        Crawl from base_url until the unvisited stack is empty.

        Returns:
            Statistics for the finished crawl.
        """
        if self.state is not SpiderState.IDLE:
            raise RuntimeError(f"Spider already {self.state.value}")
        self.state = SpiderState.RUNNING
        logger.info("Starting crawl from: %s (queue %s)", self.base_url, self.queue_name)

        try:
            response = self._load_url(self.base_url)
            if response is not None:
                self.visit(self.base_url, response)
                while self.unvisited_urls:
                    url = self.unvisited_urls.pop()
                    if self.is_visited(url):
                        self.stats.skipped_visited += 1
                        continue
                    response = self._load_url(url)
                    if response is not None:
                        self.visit(url, response)
        finally:
            self.state = SpiderState.DONE

        logger.info("Crawl finished. %s", self.stats.summary())
        return self.stats

    def visit(self, page_url: str, response: Response) -> None:
        page = self.read_response(page_url, response)
        if page is not None:
            self.visit_page(page)

    def read_response(self, page_url: str, response: Response) -> Optional[Page]:
        """Build a page from a response and extract its links."""
        if not is_absolute(page_url):
            return None
        page = build_page(strip_fragment(canonical(page_url)), response.body, response.headers)
        return extract_links(page, strict_origin=self.config.strict_origin)

    def visit_page(self, page: Page) -> None:
        """
        Record page as visited, queue its links and publish it.

        A failed publish is logged and the page still counts as visited.
        """
        self._add_visited_url(page.url)
        for url in page.urls:
            self.unvisited_urls.append(url)
        self.stats.pages_visited += 1
        self.stats.links_discovered += len(page.urls)
        logger.debug("Visited %s (+%d links)", page.url, len(page.urls))

        try:
            self.publisher.push(self.queue_name, to_job(page))
        except PublishError as e:
            self.stats.publish_errors += 1
            logger.error("Redis %s: %s", e.category, e.description)

    def close(self) -> None:
        """Release the fetcher session and the broker connection."""
        for resource in (self.fetcher, self.publisher):
            close = getattr(resource, "close", None)
            if close is not None:
                close()

    def _load_url(self, url: str) -> Optional[Response]:
        response = self.fetcher.fetch(url)
        if response is None:
            self.stats.fetch_errors += 1
        return response

    def _add_visited_url(self, url: str) -> None:
        if url not in self._visited:
            self._visited.add(url)
            self.visited_urls.append(url)
