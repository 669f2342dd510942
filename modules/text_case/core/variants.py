from __future__ import annotations

import random
import re
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping

from modules.text_case.core.tokenize import (
    NON_WHITESPACE_CLASS,
    WHITESPACE_RUN_RE,
    apply_decisions,
    classify_boundaries,
    code_units,
    split_words,
)

CaseVariantSet = Mapping[str, str]

TITLE_WORD_RE = re.compile("[A-Za-z0-9_]" + NON_WHITESPACE_CLASS + "*")

CASE_TYPES: List[Dict[str, str]] = [
    {
        "key": "lowercase",
        "name": "lowercase",
        "description": "All characters in lowercase",
        "example": "hello world",
    },
    {
        "key": "uppercase",
        "name": "UPPERCASE",
        "description": "All characters in uppercase",
        "example": "HELLO WORLD",
    },
    {
        "key": "titleCase",
        "name": "Title Case",
        "description": "First letter of each word capitalized",
        "example": "Hello World",
    },
    {
        "key": "sentenceCase",
        "name": "Sentence case",
        "description": "First letter of first word capitalized",
        "example": "Hello world",
    },
    {
        "key": "camelCase",
        "name": "camelCase",
        "description": "First word lowercase, subsequent words capitalized, no spaces",
        "example": "helloWorld",
    },
    {
        "key": "pascalCase",
        "name": "PascalCase",
        "description": "All words capitalized, no spaces",
        "example": "HelloWorld",
    },
    {
        "key": "snakeCase",
        "name": "snake_case",
        "description": "All lowercase with underscores",
        "example": "hello_world",
    },
    {
        "key": "kebabCase",
        "name": "kebab-case",
        "description": "All lowercase with hyphens",
        "example": "hello-world",
    },
    {
        "key": "constantCase",
        "name": "CONSTANT_CASE",
        "description": "All uppercase with underscores",
        "example": "HELLO_WORLD",
    },
    {
        "key": "dotCase",
        "name": "dot.case",
        "description": "All lowercase with dots",
        "example": "hello.world",
    },
    {
        "key": "pathCase",
        "name": "path/case",
        "description": "All lowercase with forward slashes",
        "example": "hello/world",
    },
    {
        "key": "alternatingCase",
        "name": "aLtErNaTiNg CaSe",
        "description": "Alternating uppercase and lowercase characters",
        "example": "hElLo WoRlD",
    },
    {
        "key": "inverseCase",
        "name": "iNVERSE cASE",
        "description": "Inverts the case of each character",
        "example": "hELLO wORLD",
    },
    {
        "key": "randomCase",
        "name": "RaNdOm CaSe",
        "description": "Randomly uppercase or lowercase each character",
        "example": "HeLLo WoRLd",
    },
]

RANDOM_VARIANT = "randomCase"
DETERMINISTIC_VARIANTS = tuple(
    item["key"] for item in CASE_TYPES if item["key"] != RANDOM_VARIANT
)


def list_case_types() -> List[Dict[str, str]]:
    return [dict(item) for item in CASE_TYPES]


def lowercase(text: str) -> str:
    return text.lower()


def uppercase(text: str) -> str:
    return text.upper()


def title_case(text: str) -> str:
    return TITLE_WORD_RE.sub(
        lambda match: match.group(0)[0].upper() + match.group(0)[1:].lower(),
        text,
    )


def sentence_case(text: str) -> str:
    return text[:1].upper() + text[1:].lower()


def camel_case(text: str) -> str:
    cased = apply_decisions(text, classify_boundaries(text, lower_first=True))
    return WHITESPACE_RUN_RE.sub("", cased)


def pascal_case(text: str) -> str:
    cased = apply_decisions(text, classify_boundaries(text, lower_first=False))
    return WHITESPACE_RUN_RE.sub("", cased)


def _join_words(text: str, separator: str, *, upper: bool = False) -> str:
    words = split_words(text)
    if upper:
        return separator.join(word.upper() for word in words)
    return separator.join(word.lower() for word in words)


def snake_case(text: str) -> str:
    return _join_words(text, "_")


def kebab_case(text: str) -> str:
    return _join_words(text, "-")


def constant_case(text: str) -> str:
    return _join_words(text, "_", upper=True)


def dot_case(text: str) -> str:
    return _join_words(text, ".")


def path_case(text: str) -> str:
    return _join_words(text, "/")


def alternating_case(text: str) -> str:
    # Parity counts UTF-16 code units, spaces and punctuation included.
    chars = []
    index = 0
    for char in text:
        chars.append(char.lower() if index % 2 == 0 else char.upper())
        index += code_units(char)
    return "".join(chars)


def inverse_case(text: str) -> str:
    return "".join(
        char.upper() if char == char.lower() else char.lower() for char in text
    )


def random_case(text: str, rng: random.Random | None = None) -> str:
    """Flip a fair coin per character: heads uppercases, tails lowercases.

    Output is not reproducible unless the caller passes a seeded ``rng``.
    """
    if rng is None:
        rng = random.SystemRandom()
    return "".join(
        char.upper() if rng.random() > 0.5 else char.lower() for char in text
    )


VARIANTS: Dict[str, Callable[[str], str]] = {
    "lowercase": lowercase,
    "uppercase": uppercase,
    "titleCase": title_case,
    "sentenceCase": sentence_case,
    "camelCase": camel_case,
    "pascalCase": pascal_case,
    "snakeCase": snake_case,
    "kebabCase": kebab_case,
    "constantCase": constant_case,
    "dotCase": dot_case,
    "pathCase": path_case,
    "alternatingCase": alternating_case,
    "inverseCase": inverse_case,
}


def convert(text: str, *, rng: random.Random | None = None) -> CaseVariantSet:
    """Compute all fourteen case variants of ``text``.

    Never raises for a string input; the empty string maps every variant
    to the empty string. The result is read-only and ordered like
    ``CASE_TYPES``.
    """
    results: Dict[str, str] = {}
    for item in CASE_TYPES:
        key = item["key"]
        if key == RANDOM_VARIANT:
            results[key] = random_case(text, rng)
        else:
            results[key] = VARIANTS[key](text)
    return MappingProxyType(results)
