"""Text normalization shared by the matcher and the field scanner."""

import math
import re
from functools import lru_cache

_SPACE = re.compile(r"[^ ]+")


def normalize(text: str, case_sensitive: bool = False) -> str:
    """Return the comparable form of ``text``.

    Only case is folded. Whitespace and punctuation are kept so the matcher
    sees the text verbatim.
    """
    return text if case_sensitive else text.lower()


def tokenize(text: str) -> list[str]:
    """Split text into space-separated units."""
    return _SPACE.findall(text)


@lru_cache(maxsize=None)
def _norm_for_count(count: int) -> float:
    return round(1 / math.sqrt(count), 3)


def field_norm(text: str) -> float:
    """Length norm of a field value: 1 / sqrt(number of tokens).

    Longer fields get a smaller norm, which weakens their scores when the
    norm is applied as an exponent. Empty text counts as one token.
    """
    return _norm_for_count(max(len(tokenize(text)), 1))
