from __future__ import annotations

import re
from typing import List

# Word characters are ASCII only; non-ASCII letters pass through unmatched.
NON_WORD_RE = re.compile(r"\W+", re.ASCII)
SPLIT_RE = re.compile(r" |\B(?=[A-Z])", re.ASCII)
WORD_CHAR_RE = re.compile(r"\w", re.ASCII)

# Browser whitespace: includes U+FEFF, excludes the \x1c-\x1f separators
# that Python's Unicode \s would match.
_WHITESPACE_CHARS = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
WHITESPACE_CLASS = f"[{_WHITESPACE_CHARS}]"
NON_WHITESPACE_CLASS = f"[^{_WHITESPACE_CHARS}]"
WHITESPACE_RE = re.compile(WHITESPACE_CLASS)
WHITESPACE_RUN_RE = re.compile(WHITESPACE_CLASS + "+")

FORCE_LOWER = "lower"
FORCE_UPPER = "upper"
UNCHANGED = "keep"


def _is_word_char(char: str) -> bool:
    return WORD_CHAR_RE.fullmatch(char) is not None


def is_blank(text: str) -> bool:
    return WHITESPACE_RUN_RE.sub("", text) == ""


def code_units(char: str) -> int:
    """UTF-16 length of a character: 2 above U+FFFF, else 1."""
    return 2 if ord(char) > 0xFFFF else 1


def split_words(text: str) -> List[str]:
    """Split text into word tokens for the joined variants.

    Runs of non-word characters collapse into a single separator and
    internal capitals start a new token, so ``"helloWorld"`` yields
    ``["hello", "World"]``. Empty tokens left by leading or trailing
    separators are dropped.
    """
    spaced = NON_WORD_RE.sub(" ", text)
    return [token for token in SPLIT_RE.split(spaced) if token]


def is_word_start(text: str, index: int) -> bool:
    char = text[index]
    if "A" <= char <= "Z":
        return True
    if not _is_word_char(char):
        return False
    return index == 0 or not _is_word_char(text[index - 1])


def classify_boundaries(text: str, *, lower_first: bool) -> List[str]:
    """Tag every index with the casing decision for camel/pascal output."""
    decisions: List[str] = []
    for index in range(len(text)):
        if not is_word_start(text, index):
            decisions.append(UNCHANGED)
        elif index == 0 and lower_first:
            decisions.append(FORCE_LOWER)
        else:
            decisions.append(FORCE_UPPER)
    return decisions


def apply_decisions(text: str, decisions: List[str]) -> str:
    chars = []
    for char, decision in zip(text, decisions):
        if decision == FORCE_LOWER:
            chars.append(char.lower())
        elif decision == FORCE_UPPER:
            chars.append(char.upper())
        else:
            chars.append(char)
    return "".join(chars)
