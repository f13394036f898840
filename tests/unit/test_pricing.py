"""Unit tests for the pricing model and the estimate record."""

import json

import pytest
from pydantic import ValidationError

from printquote.core.config import PricingConfig
from printquote.geometry import BoundingBox, Confidence, Geometry
from printquote.pricing import (
    estimate_grams,
    estimate_hours,
    price,
    recommended_infill,
    round_half_away,
)


def make_geometry(volume_cm3=1.0, area_cm2=6.0, lo=(-5.0, -5.0, -5.0), hi=(5.0, 5.0, 5.0),
                  confidence=Confidence.HIGH, triangles=12):
    return Geometry(
        triangle_count=triangles,
        bounding_box=BoundingBox(min=lo, max=hi),
        volume_cm3=volume_cm3,
        surface_area_cm2=area_cm2,
        confidence=confidence,
    )


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (0.125, 2, 0.13),
        (-0.125, 2, -0.13),
        (2.5, 0, 3.0),
        (-2.5, 0, -3.0),
        (8.04, 1, 8.0),
        (0.6666666, 2, 0.67),
        (13.7933333, 2, 13.79),
        (0.0, 2, 0.0),
    ],
)
def test_round_half_away(value, digits, expected):
    assert round_half_away(value, digits) == pytest.approx(expected)


class TestGrams:
    """Test mass estimation."""

    def test_small_part_hits_floor(self):
        assert estimate_grams(make_geometry(volume_cm3=1.0)) == 8.0

    def test_volume_with_margin(self):
        grams = estimate_grams(make_geometry(volume_cm3=100.0))
        assert grams == pytest.approx(100.0 * 1.24 * 1.05)

    def test_density_is_applied(self):
        grams = estimate_grams(make_geometry(volume_cm3=100.0), density=1.0)
        assert grams == pytest.approx(105.0)

    def test_zero_volume_uses_diagonal(self):
        geometry = make_geometry(volume_cm3=0.0, lo=(0.0, 0.0, 0.0), hi=(30.0, 40.0, 0.0))
        assert estimate_grams(geometry) == pytest.approx(45.0)

    def test_zero_volume_small_diagonal_hits_floor(self):
        geometry = make_geometry(volume_cm3=0.0, lo=(0.0, 0.0, 0.0), hi=(1.0, 1.0, 0.0))
        assert estimate_grams(geometry) == 8.0


class TestHours:
    """Test print time estimation."""

    def test_mass_rate(self):
        assert estimate_hours(24.0, 1.0, 5500) == pytest.approx(2.0)

    def test_throughput_floor(self):
        # 110 cm^3 at 5500 mm^3/h takes 20 h, more than 24 g / 12 g/h
        assert estimate_hours(24.0, 110.0, 5500) == pytest.approx(20.0)

    def test_zero_speed_disables_floor(self):
        assert estimate_hours(24.0, 110.0, 0) == pytest.approx(2.0)

    def test_zero_volume_disables_floor(self):
        assert estimate_hours(24.0, 0.0, 5500) == pytest.approx(2.0)


@pytest.mark.parametrize(
    "grams, infill",
    [
        (8.0, 25),
        (10.0, 25),
        (50.0, 20),
        (150.0, 15),
        (29.99, 25),
        (30.0, 20),
        (120.0, 20),
        (120.01, 15),
        (250.0, 15),
    ],
)
def test_recommended_infill(grams, infill):
    assert recommended_infill(grams) == infill


class TestPrice:
    """Test the full pricing computation."""

    def test_reference_cube(self, pricing_config, fixed_time):
        estimate = price(
            make_geometry(),
            pricing_config,
            file_name="cube.stl",
            file_size_bytes=684,
            generated_at=fixed_time,
        )

        assert estimate.estimated_grams == 8.0
        assert estimate.estimated_hours == 0.67
        assert estimate.estimated_price == 13.79
        assert estimate.recommended_infill == 25
        assert estimate.volume_cm3 == 1.0
        assert estimate.surface_area_cm2 == 6.0
        assert estimate.confidence is Confidence.HIGH
        assert estimate.metadata.generated_at == fixed_time

    def test_rates_are_echoed(self, fixed_time):
        config = PricingConfig(
            material_cost_per_gram=0.2,
            machine_rate_per_hour=10.0,
            setup_fee=0.0,
            print_speed=0.0,
            material="PETG",
            density_g_cm3=1.27,
        )
        estimate = price(make_geometry(), config, generated_at=fixed_time)

        assert estimate.material == "PETG"
        assert estimate.density == 1.27
        assert estimate.setup_fee == 0.0
        assert estimate.machine_rate == 10.0
        assert estimate.print_speed == 0.0
        assert estimate.material_cost == pytest.approx(8.0 * 0.2)
        assert estimate.estimated_price == pytest.approx(round_half_away(8.0 / 12 * 10 + 1.6, 2))

    def test_default_config(self, fixed_time):
        estimate = price(make_geometry(), generated_at=fixed_time)
        assert estimate.estimated_price == 13.79

    def test_price_grows_with_volume(self, pricing_config, fixed_time):
        small = price(make_geometry(volume_cm3=10.0), pricing_config, generated_at=fixed_time)
        large = price(make_geometry(volume_cm3=200.0), pricing_config, generated_at=fixed_time)

        assert large.estimated_price > small.estimated_price
        assert large.recommended_infill == 15

    def test_deterministic(self, pricing_config, fixed_time):
        geometry = make_geometry(volume_cm3=42.42, area_cm2=77.7)
        first = price(geometry, pricing_config, warnings=["w"], generated_at=fixed_time)
        second = price(geometry, pricing_config, warnings=["w"], generated_at=fixed_time)

        assert first == second
        assert first.to_json() == second.to_json()

    def test_generated_at_defaults_to_now(self):
        estimate = price(make_geometry())
        assert estimate.metadata.generated_at.tzinfo is not None

    def test_warnings_are_attached(self, fixed_time):
        estimate = price(make_geometry(), warnings=["one", "two"], generated_at=fixed_time)
        assert estimate.warnings == ("one", "two")


class TestEstimate:
    """Test the estimate record and its serialised forms."""

    @pytest.fixture
    def estimate(self, pricing_config, fixed_time):
        return price(
            make_geometry(),
            pricing_config,
            file_name="cube.stl",
            file_size_bytes=684,
            warnings=["careful"],
            generated_at=fixed_time,
        )

    def test_to_dict_uses_wire_names(self, estimate):
        data = estimate.to_dict()

        assert set(data) == {
            "fileName", "fileSizeBytes", "material", "density", "materialCost",
            "setupFee", "machineRate", "printSpeed", "estimatedGrams",
            "estimatedHours", "estimatedPrice", "recommendedInfill",
            "triangleCount", "boundingBoxMm", "volumeCm3", "surfaceAreaCm2",
            "confidence", "warnings", "metadata",
        }
        assert data["confidence"] == "high"
        assert data["boundingBoxMm"] == {"min": [-5.0, -5.0, -5.0], "max": [5.0, 5.0, 5.0]}
        assert data["warnings"] == ["careful"]
        assert data["metadata"] == {"generatedAt": "2024-01-02T03:04:05Z"}

    def test_to_json(self, estimate):
        data = json.loads(estimate.to_json())
        assert data["estimatedPrice"] == 13.79
        assert data["fileName"] == "cube.stl"

    def test_is_frozen(self, estimate):
        with pytest.raises(ValidationError):
            estimate.estimated_price = 0.0

    def test_price_cents(self, estimate):
        assert estimate.estimated_price_cents == 1379

    def test_job_summary(self, estimate):
        summary = estimate.job_summary()

        assert summary["estimatedPriceCents"] == 1379
        assert summary["estimatedGrams"] == 8.0
        assert summary["estimatedHours"] == 0.67
        assert summary["analysis"] == {
            "surfaceAreaCm2": 6.0,
            "volumeCm3": 1.0,
            "triangleCount": 12,
            "infill": 25,
        }
        assert summary["boundingBoxMm"]["max"] == [5.0, 5.0, 5.0]
        assert summary["originalExt"] == ".stl"

    def test_rejects_negative_volume(self, estimate):
        data = estimate.to_dict()
        data["volumeCm3"] = -1.0

        with pytest.raises(ValidationError):
            type(estimate).model_validate(data)
