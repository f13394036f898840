"""printquote - geometry estimation and pricing for 3D print uploads."""

from printquote.core.config import PricingConfig
from printquote.core.engine import QuoteEngine, estimate
from printquote.geometry.types import BoundingBox, Confidence, Geometry
from printquote.pricing.estimate import Estimate

__version__ = "0.1.0"

__all__ = [
    "QuoteEngine",
    "estimate",
    "Estimate",
    "Geometry",
    "BoundingBox",
    "Confidence",
    "PricingConfig",
]
