import logging
from typing import Callable, Dict, Iterable, List

from sitesearch.domain.crawl_result import CrawlResult
from sitesearch.domain.search_index import SearchIndex
from sitesearch.services.tokenizer import tokenize as default_tokenize

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], List[str]]


class IndexBuilder:
    """Builds a term-frequency index from finished crawl results."""

    def __init__(self, tokenizer: Tokenizer = default_tokenize):
        self.tokenizer = tokenizer

    def build(self, results: Iterable[CrawlResult]) -> SearchIndex:
        results = list(results)
        term_tf: Dict[str, Dict[str, int]] = {}
        for result in results:
            for token in self.tokenizer(result.body_text):
                postings = term_tf.setdefault(token, {})
                postings[result.url] = postings.get(result.url, 0) + 1
        index = SearchIndex(term_tf=term_tf, doc_count=len(results))
        logger.info("Built index: %d documents, %d terms", index.doc_count, index.term_count)
        return index


def build(results: Iterable[CrawlResult], tokenize: Tokenizer = default_tokenize) -> SearchIndex:
    return IndexBuilder(tokenize).build(results)
