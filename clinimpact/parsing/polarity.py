"""Positive/negative label classification for short text spans."""
from __future__ import annotations

import re
from enum import Enum


class Polarity(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    INDETERMINATE = "indeterminate"


_POSITIVE_WORDS = re.compile(r"\b(?:true|positive|pos)\b", re.IGNORECASE)
_NEGATIVE_WORDS = re.compile(r"\b(?:false|negative|neg)\b", re.IGNORECASE)


def classify_polarity(span: str) -> Polarity:
    """Classify *span* as positive, negative or indeterminate.

    The positive word set is checked first, so a span holding both
    "positive" and "negative" is positive no matter which comes first.
    """
    if _POSITIVE_WORDS.search(span):
        return Polarity.POSITIVE
    if _NEGATIVE_WORDS.search(span):
        return Polarity.NEGATIVE
    return Polarity.INDETERMINATE
