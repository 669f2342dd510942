from __future__ import annotations

import re
from typing import NamedTuple

from modules.text_case.core.tokenize import (
    WHITESPACE_RE,
    WHITESPACE_RUN_RE,
    code_units,
    is_blank,
)

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


class TextStats(NamedTuple):
    total_chars: int
    chars_no_spaces: int
    word_count: int
    sentence_count: int


def utf16_length(text: str) -> int:
    return sum(code_units(char) for char in text)


def stats(text: str) -> TextStats:
    """Count characters as UTF-16 code units, the way a browser does."""
    total = utf16_length(text)
    # All whitespace is in the BMP, one code unit each.
    no_spaces = total - len(WHITESPACE_RE.findall(text))
    words = [word for word in WHITESPACE_RUN_RE.split(text) if word]
    sentences = [part for part in SENTENCE_SPLIT_RE.split(text) if not is_blank(part)]
    return TextStats(
        total_chars=total,
        chars_no_spaces=no_spaces,
        word_count=len(words),
        sentence_count=len(sentences),
    )
