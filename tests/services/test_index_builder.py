from sitesearch.domain.crawl_result import CrawlResult
from sitesearch.services.index_builder import IndexBuilder, build


def test_counts_every_occurrence_per_document():
    results = [
        CrawlResult(url="http://example.com/a", body_text="Spam spam, SPAM! eggs"),
        CrawlResult(url="http://example.com/b", body_text="eggs and ham"),
    ]
    index = build(results)
    assert index.term_tf["spam"] == {"http://example.com/a": 3}
    assert index.term_tf["eggs"] == {"http://example.com/a": 1, "http://example.com/b": 1}
    assert index.term_tf["ham"] == {"http://example.com/b": 1}
    assert index.doc_count == 2


def test_doc_count_includes_pages_without_text():
    results = [CrawlResult(url="http://example.com/empty"), CrawlResult(url="http://example.com/x", body_text="x")]
    index = build(results)
    assert index.doc_count == 2
    assert index.term_tf == {"x": {"http://example.com/x": 1}}


def test_empty_results_give_empty_index():
    index = build([])
    assert index.doc_count == 0
    assert index.term_tf == {}


def test_uses_injected_tokenizer():
    calls = []

    def tokenizer(text):
        calls.append(text)
        return text.split("|")

    index = IndexBuilder(tokenizer).build([CrawlResult(url="u", body_text="A|b|A")])
    assert calls == ["A|b|A"]
    assert index.term_tf == {"A": {"u": 2}, "b": {"u": 1}}


def test_sum_of_counts_matches_token_occurrences():
    body = "one two two three three three"
    index = build([CrawlResult(url="d", body_text=body)])
    assert sum(postings["d"] for postings in index.term_tf.values()) == len(body.split())
