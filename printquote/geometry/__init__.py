"""Mesh geometry types and numeric routines for printquote."""

from printquote.geometry.accumulator import (
    MeshTotals,
    signed_volume,
    triangle_area,
)
from printquote.geometry.heuristic import HEURISTIC_WARNING, estimate_from_size
from printquote.geometry.types import BoundingBox, Confidence, Geometry

__all__ = [
    "BoundingBox",
    "Confidence",
    "Geometry",
    "MeshTotals",
    "signed_volume",
    "triangle_area",
    "HEURISTIC_WARNING",
    "estimate_from_size",
]
