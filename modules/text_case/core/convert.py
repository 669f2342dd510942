from __future__ import annotations

import random
from typing import Any, Dict, Mapping, Tuple

import structlog

from modules.text_case.core.stats import stats
from modules.text_case.core.tokenize import is_blank
from modules.text_case.core.variants import CASE_TYPES, convert

logger = structlog.get_logger(__name__)

EMPTY_INPUT_ERROR = "Please enter text to convert"
SEED_ERROR = "Seed must be a whole number."

SAMPLE_TEXT = (
    "Hello World! This is a SAMPLE text for testing different case "
    "conversions. It includes numbers123 and special-characters."
)


def _resolve_rng(seed: Any) -> Tuple[random.Random | None, str | None]:
    if seed is None or not str(seed).strip():
        return random.SystemRandom(), None
    try:
        return random.Random(int(str(seed).strip())), None
    except ValueError:
        return None, SEED_ERROR


def convert_text(
    text: str | None,
    *,
    seed: Any = None,
) -> Tuple[Dict[str, object] | None, str | None]:
    """Run the case engine behind the blank-input guard.

    Blank input never reaches the engine; the caller gets the validation
    message instead. A seed pins ``randomCase`` for this call only.
    """
    if text is None or is_blank(text):
        logger.info("text_case.rejected", reason="blank_input")
        return None, EMPTY_INPUT_ERROR

    rng, error = _resolve_rng(seed)
    if error or rng is None:
        logger.info("text_case.rejected", reason="invalid_seed")
        return None, error

    conversions = convert(text, rng=rng)
    text_stats = stats(text)
    logger.debug(
        "text_case.converted",
        chars=text_stats.total_chars,
        formats=len(conversions),
        seeded=not isinstance(rng, random.SystemRandom),
    )
    return {
        "conversions": dict(conversions),
        "formats": len(conversions),
        "stats": text_stats._asdict(),
        "deterministic": not isinstance(rng, random.SystemRandom),
    }, None


def export_conversions(conversions: Mapping[str, str]) -> str:
    lines = [
        f"{item['name']}: {conversions[item['key']]}"
        for item in CASE_TYPES
        if item["key"] in conversions
    ]
    return "\n".join(lines) + "\n"
