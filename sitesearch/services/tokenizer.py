import re
from typing import List

# leading/trailing runs of anything that is not a letter or digit
_EDGE_PUNCTUATION = re.compile(r"^[\W_]+|[\W_]+$")


def tokenize(text: str) -> List[str]:
    """Split `text` on whitespace, trim non-alphanumeric edges, lowercase.

    Pieces that end up empty are dropped. Used for both indexing and queries.
    """
    if not text:
        return []
    tokens = []
    for piece in text.split():
        word = _EDGE_PUNCTUATION.sub("", piece).lower()
        if word:
            tokens.append(word)
    return tokens
