"""Promotion code generation.

A code is the first two characters of the promotion description, upper
cased, followed by five characters drawn from ``A-Z0-9``
(e.g. ``"SU7K2QX"`` for "Summer deals").  Uniqueness is checked against the
codes already in use, case-insensitively, before a candidate is accepted.
"""

from __future__ import annotations

import secrets
from typing import Callable, Iterable, Optional

import structlog

from modules.promotions.constants import (
    CODE_ALPHABET,
    CODE_PREFIX_LENGTH,
    CODE_SUFFIX_LENGTH,
    PLACEHOLDER_PREFIX,
    PROMOTION_CODE_MAX_RETRIES,
)
from modules.promotions.exceptions import CodeGenerationExhausted

logger = structlog.get_logger(__name__)

Chooser = Callable[[str], str]


def code_prefix(description: Optional[str]) -> str:
    prefix = (description or "").strip().upper()[:CODE_PREFIX_LENGTH]
    return prefix or PLACEHOLDER_PREFIX


def generate_code(
    description: Optional[str],
    existing_codes: Iterable[str],
    chooser: Optional[Chooser] = None,
) -> str:
    """Return a code not present in *existing_codes*.

    *chooser* picks one character from the alphabet; it defaults to
    ``secrets.choice`` and is replaceable for deterministic tests.

    Raises:
        CodeGenerationExhausted: no free code after
            ``PROMOTION_CODE_MAX_RETRIES`` attempts.
    """
    choose = chooser or secrets.choice
    prefix = code_prefix(description)
    taken = {code.upper() for code in existing_codes if isinstance(code, str)}

    for attempt in range(1, PROMOTION_CODE_MAX_RETRIES + 1):
        suffix = "".join(choose(CODE_ALPHABET) for _ in range(CODE_SUFFIX_LENGTH))
        candidate = f"{prefix}{suffix}"
        if candidate not in taken:
            break
        logger.info("promotion.code_collision", attempt=attempt)
    else:
        logger.error(
            "promotion.code_generation_exhausted",
            attempts=PROMOTION_CODE_MAX_RETRIES,
        )
        raise CodeGenerationExhausted(
            f"Failed to generate a unique promotion code after "
            f"{PROMOTION_CODE_MAX_RETRIES} attempts"
        )

    logger.info("promotion.code_generated", code=candidate, attempts=attempt)
    return candidate
