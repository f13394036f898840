"""Pricing model: geometry plus rates in, estimate out.

Everything here is a pure function of its arguments. The only value that is
not derived from the inputs is ``metadata.generatedAt``, which defaults to
the current UTC time and can be pinned by the caller.
"""

import math
from datetime import datetime, timezone
from typing import Optional, Sequence

from printquote.core.config import PricingConfig
from printquote.geometry.types import Geometry
from printquote.pricing.estimate import Estimate, EstimateMetadata

MIN_GRAMS = 8.0
MATERIAL_MARGIN = 1.05  # extra filament for supports, purge and waste
GRAMS_PER_HOUR = 12.0
DIAGONAL_GRAMS_PER_MM = 0.9


def round_half_away(value: float, digits: int) -> float:
    """Round to ``digits`` decimals with halves going away from zero."""
    scale = 10.0 ** digits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def estimate_grams(geometry: Geometry, density: float = 1.24) -> float:
    """Filament mass for a part, with margin and an 8 g floor.

    A zero volume falls back to a bounding-box diagonal proxy.
    """
    if geometry.volume_cm3 == 0:
        return max(MIN_GRAMS, geometry.bounding_box.diagonal * DIAGONAL_GRAMS_PER_MM)
    return max(MIN_GRAMS, geometry.volume_cm3 * density * MATERIAL_MARGIN)


def estimate_hours(grams: float, volume_cm3: float, print_speed: float) -> float:
    """Print time from mass, floored by the machine's volumetric throughput."""
    hours = grams / GRAMS_PER_HOUR
    if print_speed > 0 and volume_cm3 > 0:
        print_hours = volume_cm3 * 1000.0 / print_speed
        hours = max(hours, print_hours)
    return hours


def recommended_infill(grams: float) -> int:
    """Infill step function: heavy parts get sparser infill."""
    if grams > 120:
        return 15
    if grams < 30:
        return 25
    return 20


def price(
    geometry: Geometry,
    config: Optional[PricingConfig] = None,
    *,
    file_name: str = "",
    file_size_bytes: int = 0,
    warnings: Sequence[str] = (),
    generated_at: Optional[datetime] = None,
) -> Estimate:
    """Price a geometry.

    Args:
        geometry: Geometry recovered from the upload
        config: Rates to apply (defaults to :class:`PricingConfig`)
        file_name: Echoed into the estimate
        file_size_bytes: Echoed into the estimate
        warnings: Advisory messages to attach
        generated_at: Timestamp for ``metadata.generatedAt``

    Returns:
        Estimate with reported magnitudes rounded
    """
    config = config or PricingConfig()

    grams = estimate_grams(geometry, config.density_g_cm3)
    hours = estimate_hours(grams, geometry.volume_cm3, config.print_speed)

    machine = hours * config.machine_rate_per_hour
    material = grams * config.material_cost_per_gram
    total = config.setup_fee + machine + material

    return Estimate(
        file_name=file_name,
        file_size_bytes=file_size_bytes,
        material=config.material,
        density=config.density_g_cm3,
        material_cost=material,
        setup_fee=config.setup_fee,
        machine_rate=config.machine_rate_per_hour,
        print_speed=config.print_speed,
        estimated_grams=round_half_away(grams, 1),
        estimated_hours=round_half_away(hours, 2),
        estimated_price=round_half_away(total, 2),
        recommended_infill=recommended_infill(grams),
        triangle_count=geometry.triangle_count,
        bounding_box_mm=geometry.bounding_box,
        volume_cm3=round_half_away(geometry.volume_cm3, 2),
        surface_area_cm2=round_half_away(geometry.surface_area_cm2, 2),
        confidence=geometry.confidence,
        warnings=tuple(warnings),
        metadata=EstimateMetadata(
            generated_at=generated_at or datetime.now(timezone.utc)
        ),
    )
