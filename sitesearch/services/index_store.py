import json
import logging
import os
import tempfile
from typing import Dict, List

from pydantic import BaseModel, NonNegativeInt, TypeAdapter, ValidationError

from sitesearch.domain.search_index import SearchIndex
from sitesearch.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class CountedIndexFile(BaseModel):
    """Current on-disk schema: per-document term counts plus document count."""

    term_tf: Dict[str, Dict[str, NonNegativeInt]]
    doc_count: NonNegativeInt


# Older schema: term -> list of URLs, no counts.
LegacyIndexFile = TypeAdapter(Dict[str, List[str]])


class IndexStore:
    """Filesystem/JSON IO for the search index.

    Responsibility: read and write index files and turn either on-disk schema
    into a `SearchIndex`. Nothing outside this class sees the file schemas.
    """

    def save(self, index: SearchIndex, path: str) -> None:
        """Write `index` to `path`, replacing any existing file atomically."""
        payload = {"term_tf": index.term_tf, "doc_count": index.doc_count}
        directory = os.path.dirname(os.path.abspath(path))
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{os.path.basename(path)}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                json.dump(payload, f, indent=2, sort_keys=True, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)  # atomic rename
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceError(path, e) from e
        logger.info("Saved index to %s (%d documents, %d terms)", path, index.doc_count, index.term_count)

    def load(self, path: str) -> SearchIndex:
        """Read an index file in the counted schema, falling back to the legacy one."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise PersistenceError(path, e) from e
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise PersistenceError(path, e, "not valid JSON") from e
        return self.parse(data, path)

    def parse(self, data: object, path: str = "<memory>") -> SearchIndex:
        try:
            counted = CountedIndexFile.model_validate(data)
        except ValidationError:
            logger.debug("%s is not in the counted schema; trying legacy schema", path)
        else:
            return SearchIndex(term_tf=counted.term_tf, doc_count=counted.doc_count)

        try:
            legacy = LegacyIndexFile.validate_python(data)
        except ValidationError as e:
            raise PersistenceError(path, e, "matches neither the counted nor the legacy index schema") from e
        logger.info("Loaded legacy index schema from %s; using a count of 1 per document", path)
        return self._from_legacy(legacy)

    def _from_legacy(self, legacy: Dict[str, List[str]]) -> SearchIndex:
        term_tf = {term: {url: 1 for url in urls} for term, urls in legacy.items()}
        documents = {url for urls in legacy.values() for url in urls}
        return SearchIndex(term_tf=term_tf, doc_count=len(documents))
