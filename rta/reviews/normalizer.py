"""Review cleanup: split, trim, drop blanks and exact duplicates."""

from __future__ import annotations

from typing import Iterable

from rta.errors import InsufficientReviews

MIN_REVIEWS = 3


def normalize_reviews(raw: str | Iterable[str]) -> list[str]:
    """
    Return unique non-empty reviews in first-occurrence order.

    ``raw`` is either newline-delimited text or a sequence of review strings.
    Duplicate detection is exact and case-sensitive.
    """
    lines = raw.splitlines() if isinstance(raw, str) else raw
    seen: set[str] = set()
    out: list[str] = []
    for line in lines:
        if line is None:
            continue
        review = str(line).strip()
        if not review or review in seen:
            continue
        seen.add(review)
        out.append(review)
    return out


def require_min_reviews(reviews: list[str], minimum: int = MIN_REVIEWS) -> list[str]:
    if len(reviews) < minimum:
        raise InsufficientReviews(found=len(reviews), required=minimum)
    return reviews
