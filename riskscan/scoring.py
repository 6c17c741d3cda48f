"""Score aggregation and classification."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import (
    CRITICAL,
    HIGH,
    LIKELY_GENUINE,
    LOW,
    MEDIUM,
    SUSPICIOUS,
    UNKNOWN,
    Signal,
)

STRONG_WEIGHT = 40
BASE_CONFIDENCE = 50
MAX_CONFIDENCE = 95


def file_risk_score(signals: Sequence[Signal]) -> int:
    """Average signal weight on a 0-100 scale.

    The divisor is the signal count times 100, so one strong signal scores the
    same as several equally strong ones.
    """
    if not signals:
        return 0
    total = sum(signal.weight for signal in signals)
    max_possible = len(signals) * 100
    normalized = total / max_possible * 100
    return min(_round_half_up(normalized), 100)


def file_risk_level(score: int) -> str:
    if score >= 80:
        return CRITICAL
    if score >= 60:
        return HIGH
    if score >= 30:
        return MEDIUM
    return LOW


def url_score(reasons: Sequence[Signal]) -> int:
    """Signed weight sum over absolute weight sum, clamped to 0-100."""
    total = sum(reason.weight for reason in reasons)
    total_abs = sum(abs(reason.weight) for reason in reasons)
    if total_abs == 0:
        return 0
    normalized = total / total_abs * 100
    return max(0, min(100, _round_half_up(normalized)))


def url_confidence(reasons: Sequence[Signal]) -> int:
    if not reasons:
        return BASE_CONFIDENCE
    strong = sum(1 for reason in reasons if abs(reason.weight) >= STRONG_WEIGHT)
    return min(MAX_CONFIDENCE, BASE_CONFIDENCE + strong * 10 + len(reasons) * 5)


def url_classification(score: int, confidence: int) -> str:
    if confidence < 30:
        return UNKNOWN
    if score <= 30:
        return LIKELY_GENUINE
    if score >= 60:
        return SUSPICIOUS
    return UNKNOWN


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upwards.
    return int(math.floor(value + 0.5))
