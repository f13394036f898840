"""Pricing model and estimate types for printquote."""

from printquote.pricing.estimate import Estimate, EstimateMetadata
from printquote.pricing.model import (
    estimate_grams,
    estimate_hours,
    price,
    recommended_infill,
    round_half_away,
)

__all__ = [
    "Estimate",
    "EstimateMetadata",
    "price",
    "estimate_grams",
    "estimate_hours",
    "recommended_infill",
    "round_half_away",
]
