"""Binary STL decoding."""

import struct
from functools import reduce

import numpy as np

from printquote.geometry.accumulator import MeshTotals
from printquote.geometry.types import Confidence, Geometry
from printquote.parsers.base import MeshParser

HEADER_SIZE = 80
COUNT_SIZE = 4
RECORD_SIZE = 50

# 12 byte normal, three 12 byte vertices, 2 byte attribute count
RECORD_DTYPE = np.dtype(
    [
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attribute", "<u2"),
    ]
)


class BinarySTLParser(MeshParser):
    """Parser for fixed-record binary STL.

    The declared triangle count must fit inside the buffer. When it does not,
    the file is most likely ASCII STL, and the dispatcher moves on to
    :class:`~printquote.parsers.ascii_stl.AsciiSTLParser`.
    """

    name = "binary_stl"
    confidence = Confidence.HIGH

    # Triangles folded per numpy pass
    BATCH_SIZE = 250_000

    def declared_count(self, data: bytes) -> int:
        """Triangle count stored after the 80 byte header.

        Raises:
            MeshParseError: If the buffer is shorter than header plus count
        """
        if len(data) < HEADER_SIZE + COUNT_SIZE:
            raise self.fail(f"buffer too small ({len(data)} bytes)")
        return struct.unpack_from("<I", data, HEADER_SIZE)[0]

    def _parse_impl(self, data: bytes) -> Geometry:
        count = self.declared_count(data)
        expected = HEADER_SIZE + COUNT_SIZE + RECORD_SIZE * count
        if expected > len(data):
            raise self.fail(
                f"declared {count} triangles need {expected} bytes, got {len(data)}"
            )
        if count == 0:
            raise self.fail("no triangles declared")

        records = np.frombuffer(
            data, dtype=RECORD_DTYPE, count=count, offset=HEADER_SIZE + COUNT_SIZE
        )
        vertices = records["vertices"]
        if not np.isfinite(vertices).all():
            raise self.fail("non-finite vertex coordinate")

        batches = (
            MeshTotals.from_triangles(vertices[start:start + self.BATCH_SIZE])
            for start in range(0, count, self.BATCH_SIZE)
        )
        totals = reduce(MeshTotals.merge, batches, MeshTotals())
        return totals.to_geometry(self.confidence, parser=self.name)
