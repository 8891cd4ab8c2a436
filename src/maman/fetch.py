"""
HTTP fetching on top of requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import requests

DEFAULT_USER_AGENT = "Maman/1.0"


@dataclass(slots=True)
class Response:
    """Decoded response for one fetched URL."""
    url: str
    status_code: int
    body: str
    headers: List[Tuple[str, str]] = field(default_factory=list)


class Fetcher:
    """Blocking GET requests through a shared session."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.timeout = timeout

    def fetch(self, url: str) -> Optional[Response]:
        """
        Fetch url and decode its body.

        Connection errors, timeouts and undecodable bodies all give None.
        Error statuses are returned like any other response.
        """
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            body = decode_body(resp.content)
        except (requests.RequestException, UnicodeDecodeError):
            return None

        return Response(
            url=url,
            status_code=resp.status_code,
            body=body,
            headers=list(resp.headers.items()),
        )

    def close(self) -> None:
        self.session.close()


def decode_body(content: bytes) -> str:
    """Strictly decode a body as UTF-8, whatever charset the server declared."""
    return content.decode("utf-8")
