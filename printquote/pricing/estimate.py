"""The estimate returned to callers, with its JSON boundary names."""

import os
from datetime import datetime
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from printquote.geometry.types import BoundingBox, Confidence


class EstimateMetadata(BaseModel):
    """Free-standing facts about how the estimate was produced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generated_at: datetime = Field(..., alias="generatedAt")


class Estimate(BaseModel):
    """Price and geometry summary for one uploaded model.

    Field aliases are the wire names used by the HTTP layer and must not
    change.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(..., alias="fileName")
    file_size_bytes: int = Field(..., ge=0, alias="fileSizeBytes")

    material: str = Field(..., alias="material")
    density: float = Field(..., alias="density")
    material_cost: float = Field(..., alias="materialCost")
    setup_fee: float = Field(..., alias="setupFee")
    machine_rate: float = Field(..., alias="machineRate")
    print_speed: float = Field(..., alias="printSpeed")

    estimated_grams: float = Field(..., alias="estimatedGrams")
    estimated_hours: float = Field(..., alias="estimatedHours")
    estimated_price: float = Field(..., alias="estimatedPrice")
    recommended_infill: int = Field(..., alias="recommendedInfill")

    triangle_count: int = Field(..., ge=0, alias="triangleCount")
    bounding_box_mm: BoundingBox = Field(..., alias="boundingBoxMm")
    volume_cm3: float = Field(..., ge=0, alias="volumeCm3")
    surface_area_cm2: float = Field(..., ge=0, alias="surfaceAreaCm2")
    confidence: Confidence = Field(..., alias="confidence")

    warnings: Tuple[str, ...] = Field((), alias="warnings")
    metadata: EstimateMetadata = Field(..., alias="metadata")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dictionary using the wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @property
    def estimated_price_cents(self) -> int:
        """Price in integer minor currency units."""
        return int(round(self.estimated_price * 100))

    def job_summary(self) -> Dict[str, Any]:
        """Record handed to the job store alongside the original upload.

        Returns:
            Dictionary with the persisted estimate fields
        """
        return {
            "fileName": self.file_name,
            "estimatedGrams": self.estimated_grams,
            "estimatedHours": self.estimated_hours,
            "estimatedPriceCents": self.estimated_price_cents,
            "analysis": {
                "surfaceAreaCm2": self.surface_area_cm2,
                "volumeCm3": self.volume_cm3,
                "triangleCount": self.triangle_count,
                "infill": self.recommended_infill,
            },
            "boundingBoxMm": {
                "min": list(self.bounding_box_mm.min),
                "max": list(self.bounding_box_mm.max),
            },
            "originalExt": os.path.splitext(self.file_name)[1],
        }
