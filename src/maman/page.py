"""
Fetched pages: construction, link extraction and job serialization.
"""
from __future__ import annotations

import json
import secrets
import string
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from bs4 import BeautifulSoup, SoupStrainer
from bs4.builder import ParserRejectedMarkup

from maman.urls import is_eligible, resolve, strip_fragment

JOB_CLASS = "Maman"
JID_LENGTH = 24
JID_ALPHABET = string.ascii_letters + string.digits

# SoupStrainer to parse only <a> tags
ANCHOR_STRAINER = SoupStrainer("a")

HeaderSource = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


@dataclass(slots=True)
class Page:
    """A single fetched document."""
    url: str
    document: str
    headers: Dict[str, str] = field(default_factory=dict)
    urls: List[str] = field(default_factory=list)
    jid: str = ""


def generate_jid(length: int = JID_LENGTH) -> str:
    """Random alphanumeric job id."""
    return "".join(secrets.choice(JID_ALPHABET) for _ in range(length))


def build_page(url: str, document: str, headers: HeaderSource) -> Page:
    """
    Build a Page from a fetch result.

    Header names are lower-cased; when a name repeats the last value wins.
    """
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    lowered: Dict[str, str] = {}
    for name, value in pairs:
        lowered[name.lower()] = value
    return Page(url=url, document=document, headers=lowered, jid=generate_jid())


def iter_hrefs(document: str) -> Iterator[str]:
    """
    Yield the href of every <a> tag in document order.

    Markup the parser cannot recover from yields nothing.
    """
    if not document or not document.strip():
        return
    try:
        soup = BeautifulSoup(document, "lxml", parse_only=ANCHOR_STRAINER)
    except ParserRejectedMarkup:
        return
    for anchor in soup.find_all("a"):
        href = anchor.attrs.get("href")
        if href is not None:
            yield href


def extract_links(page: Page, strict_origin: bool = False) -> Page:
    """Append every eligible outbound link of the page to page.urls."""
    for href in iter_hrefs(page.document):
        target = resolve(page.url, href)
        if target is None:
            continue
        target = strip_fragment(target)
        if is_eligible(page.url, target, strict_origin=strict_origin):
            page.urls.append(target)
    return page


def to_job(page: Page) -> Dict[str, Any]:
    """Wrap a page in a queue job envelope."""
    return {
        "class": JOB_CLASS,
        "retry": True,
        "args": [
            {
                "url": page.url,
                "document": page.document,
                "headers": dict(page.headers),
            }
        ],
        "jid": page.jid,
        "created_at": int(time.time()),
        "enqueued_at": int(time.time()),
    }


def dump_job(job: Mapping[str, Any]) -> str:
    """Serialize a job envelope as compact JSON with sorted keys."""
    return json.dumps(job, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
