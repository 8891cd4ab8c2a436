import json

from maman.page import JOB_CLASS, build_page, dump_job, extract_links, generate_jid, iter_hrefs, to_job


def test_build_page_lowercases_headers_last_wins():
    page = build_page(
        "https://a.com/",
        "<html></html>",
        [("Content-Type", "text/html"), ("X-Cache", "MISS"), ("x-cache", "HIT")],
    )
    assert page.headers == {"content-type": "text/html", "x-cache": "HIT"}
    assert page.urls == []
    assert len(page.jid) == 24


def test_build_page_accepts_mapping():
    page = build_page("https://a.com/", "", {"Server": "nginx"})
    assert page.headers == {"server": "nginx"}


def test_job_ids_are_alphanumeric_and_unique():
    jids = {build_page("https://a.com/", "", {}).jid for _ in range(10_000)}
    assert len(jids) == 10_000
    assert all(jid.isalnum() and jid.isascii() for jid in jids)
    assert len(generate_jid(8)) == 8


def test_iter_hrefs_only_reads_anchors():
    html = """
    <html><head><link href="/style.css" rel="stylesheet"></head>
    <body>
      <a href="/first">1</a>
      <a name="no-href">2</a>
      <img src="/img.png">
      <!-- <a href="/commented">x</a> -->
      <a href="/second">3</a>
    </body></html>
    """
    assert list(iter_hrefs(html)) == ["/first", "/second"]


def test_iter_hrefs_survives_malformed_markup():
    html = "<html><body><a href='/ok'>ok</a><p><b>unclosed <a href='/also'>x </div></span>"
    assert list(iter_hrefs(html)) == ["/ok", "/also"]
    assert list(iter_hrefs("")) == []
    assert list(iter_hrefs("<<<>>>")) == []


def test_extract_links_filters_and_keeps_order_and_duplicates():
    html = (
        '<a href="/b">b</a>'
        '<a href="https://other.test/x">other</a>'
        '<a href="#top">self</a>'
        '<a href="mailto:me@site.test">mail</a>'
        '<a href="/a#part">a</a>'
        '<a href="/b">b again</a>'
    )
    page = extract_links(build_page("https://site.test/", html, {}))
    assert page.urls == ["https://site.test/b", "https://site.test/a", "https://site.test/b"]


def test_to_job_envelope_shape():
    page = build_page("https://site.test/", "<p>hi</p>", {"Content-Type": "text/html"})
    job = to_job(page)
    assert set(job) == {"class", "retry", "args", "jid", "created_at", "enqueued_at"}
    assert job["class"] == JOB_CLASS == "Maman"
    assert job["retry"] is True
    assert job["jid"] == page.jid
    assert job["args"] == [{
        "url": "https://site.test/",
        "document": "<p>hi</p>",
        "headers": {"content-type": "text/html"},
    }]
    assert isinstance(job["created_at"], int)
    assert isinstance(job["enqueued_at"], int)
    assert abs(job["enqueued_at"] - job["created_at"]) <= 1


def test_dump_job_is_compact_sorted_utf8():
    job = {
        "retry": True,
        "class": "Maman",
        "jid": "abc",
        "args": [{"url": "https://a.com/", "headers": {"b": "2", "a": "1"}, "document": "café"}],
        "created_at": 10,
        "enqueued_at": 11,
    }
    text = dump_job(job)
    assert text == (
        '{"args":[{"document":"café","headers":{"a":"1","b":"2"},"url":"https://a.com/"}],'
        '"class":"Maman","created_at":10,"enqueued_at":11,"jid":"abc","retry":true}'
    )
    assert json.loads(text) == job
