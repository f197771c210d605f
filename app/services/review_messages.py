"""
Canned explanations shown on documents for applications in review.
"""

from __future__ import annotations

from typing import Tuple


IN_REVIEW_PREFIX = "Your application has been placed in review"

ADDRESS_SUFFIX = " pending outstanding address verification for FICA purposes."
BANK_SUFFIX = " pending outstanding bank account verification."
SUSPICIOUS_SUFFIX = " because of suspicious account behaviour. Please contact support ASAP."

# First match wins; matching is case-sensitive.
_REASON_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("address", ADDRESS_SUFFIX),
    ("bank", BANK_SUFFIX),
)


def in_review_message(reason: str) -> str:
    suffix = SUSPICIOUS_SUFFIX
    for keyword, candidate in _REASON_KEYWORDS:
        if keyword in reason:
            suffix = candidate
            break
    return IN_REVIEW_PREFIX + suffix
