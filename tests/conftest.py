from typing import Dict, List, Optional

import pytest

from maman.fetch import Response
from maman.publisher import PublishError


class FakeFetcher:
    """Serves canned bodies; URLs without one fail unless a default body is set."""

    def __init__(self, pages: Dict[str, str], default: Optional[str] = None):
        self.pages = pages
        self.default = default
        self.requested: List[str] = []

    def fetch(self, url: str) -> Optional[Response]:
        self.requested.append(url)
        body = self.pages.get(url, self.default)
        if body is None:
            return None
        return Response(url=url, status_code=200, body=body, headers=[("Content-Type", "text/html")])


class FakePublisher:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.jobs = []

    def push(self, queue, job):
        if self.fail:
            raise PublishError("ConnectionError", "Connection refused")
        self.jobs.append((queue, job))


@pytest.fixture
def publisher():
    return FakePublisher()
