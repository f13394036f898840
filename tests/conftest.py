"""Shared test fixtures and configuration."""

import struct
from datetime import datetime, timezone
from typing import Iterable

import numpy as np
import pytest
import trimesh

from printquote.core import Config, PricingConfig


def pack_binary_stl(triangles: Iterable, header: bytes = b"printquote test") -> bytes:
    """Pack triangles into a binary STL buffer."""
    tris = np.asarray(triangles, dtype=np.float32).reshape(-1, 3, 3)
    data = bytearray(header[:80].ljust(80, b"\0"))
    data.extend(struct.pack("<I", len(tris)))
    for tri in tris:
        data.extend(struct.pack("<fff", 0.0, 0.0, 0.0))
        for vertex in tri:
            data.extend(struct.pack("<fff", *(float(c) for c in vertex)))
        data.extend(struct.pack("<H", 0))
    return bytes(data)


def ascii_stl_text(triangles: Iterable, name: str = "part") -> str:
    """Render triangles as ASCII STL."""
    lines = [f"solid {name}"]
    for tri in np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 3):
        lines.append("  facet normal 0 0 0")
        lines.append("    outer loop")
        for x, y, z in tri:
            lines.append(f"      vertex {float(x)!r} {float(y)!r} {float(z)!r}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines) + "\n"


def obj_text(vertices: Iterable, faces: Iterable) -> str:
    """Render a vertex list and 0-based faces as OBJ (1-based indices)."""
    lines = ["# printquote test mesh"]
    for x, y, z in np.asarray(vertices, dtype=np.float64):
        lines.append(f"v {float(x)!r} {float(y)!r} {float(z)!r}")
    for a, b, c in np.asarray(faces, dtype=np.int64):
        lines.append(f"f {int(a) + 1} {int(b) + 1} {int(c) + 1}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def cube_mesh() -> trimesh.Trimesh:
    """10 mm cube centred on the origin (12 triangles)."""
    return trimesh.creation.box(extents=[10, 10, 10])


@pytest.fixture
def cube_triangles(cube_mesh: trimesh.Trimesh) -> np.ndarray:
    return np.asarray(cube_mesh.triangles, dtype=np.float64)


@pytest.fixture
def binary_cube(cube_triangles: np.ndarray) -> bytes:
    return pack_binary_stl(cube_triangles)


@pytest.fixture
def ascii_cube(cube_triangles: np.ndarray) -> bytes:
    return ascii_stl_text(cube_triangles, name="cube").encode("utf-8")


@pytest.fixture
def obj_cube(cube_mesh: trimesh.Trimesh) -> bytes:
    return obj_text(cube_mesh.vertices, cube_mesh.faces).encode("utf-8")


@pytest.fixture
def sphere_mesh() -> trimesh.Trimesh:
    """Icosphere of radius 20 mm."""
    return trimesh.creation.icosphere(subdivisions=3, radius=20.0)


@pytest.fixture
def pricing_config() -> PricingConfig:
    """Rates used by the reference scenario."""
    return PricingConfig(
        material_cost_per_gram=0.12,
        machine_rate_per_hour=12.5,
        setup_fee=4.5,
        print_speed=5500,
    )


@pytest.fixture
def test_config() -> Config:
    """Create a test configuration."""
    return Config(
        logging={"level": "WARNING", "format": "plain"},
    )


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_pricing_env(monkeypatch):
    """Keep PRICING_* variables from the host out of the tests."""
    for var in (
        "PRICING_MATERIAL_COST_PLA",
        "PRICING_MACHINE_RATE",
        "PRICING_SETUP_FEE",
        "PRICING_PRINT_SPEED",
    ):
        monkeypatch.delenv(var, raising=False)


# Markers for different test categories
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 1 second"
    )


@pytest.fixture
def make_binary_stl():
    """Factory fixture: ``make_binary_stl(triangles, header=...) -> bytes``."""
    return pack_binary_stl


@pytest.fixture
def make_ascii_stl():
    """Factory fixture: ``make_ascii_stl(triangles, name=...) -> str``."""
    return ascii_stl_text


@pytest.fixture
def make_obj():
    """Factory fixture: ``make_obj(vertices, faces) -> str``."""
    return obj_text
