"""Review sources: manual text normalization and Maps-link place resolution."""

from rta.reviews.normalizer import MIN_REVIEWS, normalize_reviews, require_min_reviews
from rta.reviews.place_resolver import PlaceResolver, extract_place_token, is_canonical_place_id

__all__ = [
    "MIN_REVIEWS",
    "normalize_reviews",
    "require_min_reviews",
    "PlaceResolver",
    "extract_place_token",
    "is_canonical_place_id",
]
