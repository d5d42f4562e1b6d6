"""Rating domain - 1-5 star buckets, range queries, recommendations."""

from .index import (
    MAX_RATING,
    MIN_RATING,
    RECOMMEND_THRESHOLD,
    RatingIndex,
    is_valid_rating,
)

__all__ = [
    "RatingIndex",
    "is_valid_rating",
    "MIN_RATING",
    "MAX_RATING",
    "RECOMMEND_THRESHOLD",
]
