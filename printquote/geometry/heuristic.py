"""Byte-length fallback used when no parser recovers a mesh."""

from printquote.geometry.types import BoundingBox, Confidence, Geometry

HEURISTIC_WARNING = "used heuristic estimation; detailed geometry parsing failed."

BYTES_PER_GRAM = 7000.0
MIN_GRAMS = 8.0
MAX_GRAMS = 250.0
PLA_DENSITY = 1.24
BYTES_PER_TRIANGLE = 50


def heuristic_grams(size: int) -> float:
    """Plausible part mass for a file of ``size`` bytes, clamped to 8..250 g."""
    return max(MIN_GRAMS, min(MAX_GRAMS, size / BYTES_PER_GRAM))


def estimate_from_size(size: int) -> Geometry:
    """Build a low-confidence geometry from the buffer length alone.

    The bounding box is a synthetic block proportional to the mass, anchored
    at the origin.
    """
    grams = heuristic_grams(size)
    return Geometry(
        triangle_count=size // BYTES_PER_TRIANGLE,
        bounding_box=BoundingBox(
            min=(0.0, 0.0, 0.0),
            max=(grams * 0.9, grams * 0.5, grams * 0.4),
        ),
        volume_cm3=grams / PLA_DENSITY,
        surface_area_cm2=grams * 1.5,
        confidence=Confidence.LOW,
    )
