import pytest

from sitesearch.exceptions import PageParseError
from sitesearch.services.page_extractor import PageExtractor

BASE = "http://example.com/docs/index.html"


def test_extracts_title_body_and_links():
    html = """
    <html><head><title>  Docs Home </title></head>
    <body>
      <h1>Welcome</h1><p>Read the guide.</p>
      <a href="guide.html">Guide</a>
      <a href="/about#team">About</a>
    </body></html>
    """
    page = PageExtractor().extract(html, BASE)
    assert page.title == "Docs Home"
    assert page.body_text == "Welcome Read the guide. Guide About"
    assert page.links == ["http://example.com/docs/guide.html", "http://example.com/about"]


def test_missing_title_and_body_default_to_empty():
    page = PageExtractor().extract("<html><head></head></html>", BASE)
    assert page.title == ""
    assert page.body_text == ""
    assert page.links == []


def test_document_without_body_tag_uses_text_outside_head():
    page = PageExtractor().extract("<title>T</title><p>loose text</p>", BASE)
    assert page.title == "T"
    assert page.body_text == "loose text"


def test_empty_html():
    page = PageExtractor().extract("", BASE)
    assert page == ("", "", [])


def test_external_and_non_http_links_dropped():
    html = """<body>
      <a href="http://other.org/">x</a>
      <a href="http://sub.example.com/">x</a>
      <a href="mailto:me@example.com">x</a>
      <a href="javascript:void(0)">x</a>
      <a name="no-href">x</a>
      <a href="/kept">x</a>
    </body>"""
    page = PageExtractor().extract(html, BASE)
    assert page.links == ["http://example.com/kept"]


def test_duplicate_links_are_kept():
    html = '<body><a href="/a">1</a><a href="/a#x">2</a></body>'
    page = PageExtractor().extract(html, BASE)
    assert page.links == ["http://example.com/a", "http://example.com/a"]


def test_script_and_style_not_part_of_body_text():
    html = "<body><script>var x = 1;</script><style>p {}</style><p>visible</p></body>"
    assert PageExtractor().extract(html, BASE).body_text == "visible"


def test_parser_failure_raises_page_parse_error():
    def broken_soup(html):
        raise ValueError("boom")

    with pytest.raises(PageParseError) as excinfo:
        PageExtractor(soup_factory=broken_soup).extract("<html></html>", BASE)
    assert excinfo.value.url == BASE
