from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Sequence, Tuple

from .models import ExtractionOutcome

Parser = Callable[[str], Optional[int]]
Strategy = Tuple[str, Parser]

MAGNITUDE_MULTIPLIERS = {
    "": 1,
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}

MAGNITUDE_VIEWS_RE = re.compile(
    r"([0-9][0-9,]*(?:\.[0-9]+)?)\s*([KMB])?\s+views", re.IGNORECASE
)


def parse_grouped_int(token: str) -> Optional[int]:
    """Parse ``1,234,567`` style integers; ``None`` when no digits remain."""

    if not token:
        return None
    digits = token.replace(",", "").strip()
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


def parse_magnitude_count(number: str, suffix: Optional[str] = "") -> Optional[int]:
    """Return ``floor(number * multiplier)`` for counts like ``2.8`` + ``M``.

    Thousands separators are stripped before parsing. The multiplication is
    done in :class:`~decimal.Decimal` so ``2.8M`` yields exactly 2800000.
    """

    if not number:
        return None
    multiplier = MAGNITUDE_MULTIPLIERS.get((suffix or "").strip().upper())
    if multiplier is None:
        return None
    cleaned = number.replace(",", "").strip()
    if not cleaned.isascii():
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return math.floor(value * multiplier)


def parse_magnitude_views(text: str) -> Optional[int]:
    """Find the first ``<number>[K|M|B] views`` phrase in ``text``."""

    match = MAGNITUDE_VIEWS_RE.search(text or "")
    if not match:
        return None
    return parse_magnitude_count(match.group(1), match.group(2))


def regex_int_parser(pattern: re.Pattern[str]) -> Parser:
    """Build a parser returning group 1 of ``pattern`` as a grouped integer."""

    def _parse(text: str) -> Optional[int]:
        match = pattern.search(text)
        if not match:
            return None
        return parse_grouped_int(match.group(1))

    return _parse


def run_strategies(text: str, strategies: Sequence[Strategy]) -> ExtractionOutcome:
    """Apply ``strategies`` in order and stop at the first numeric match."""

    if not text:
        return ExtractionOutcome.miss()
    for name, parser in strategies:
        value = parser(text)
        if value is not None:
            return ExtractionOutcome(matched=True, value=value, strategy=name)
    return ExtractionOutcome.miss()


__all__ = [
    "MAGNITUDE_MULTIPLIERS",
    "Parser",
    "Strategy",
    "parse_grouped_int",
    "parse_magnitude_count",
    "parse_magnitude_views",
    "regex_int_parser",
    "run_strategies",
]
