"""Format dispatch with cascading fallback to the size heuristic."""

import os
import time
from typing import List, Tuple

from printquote.core.exceptions import MeshParseError
from printquote.geometry.heuristic import HEURISTIC_WARNING, estimate_from_size
from printquote.geometry.types import Geometry
from printquote.parsers.factory import ParserFactory
from printquote.utils.logging import get_logger, log_performance

logger = get_logger(__name__)


def file_extension(file_name: str) -> str:
    """Lower-cased suffix from the last dot of the base name.

    Unlike :func:`os.path.splitext`, a name that is only an extension
    (``".stl"``) keeps it.
    """
    base = os.path.basename(file_name)
    dot = base.rfind(".")
    return base[dot:].lower() if dot >= 0 else ""


def analyse_geometry(file_name: str, data: bytes) -> Tuple[Geometry, List[str]]:
    """Recover geometry from an upload, falling back until something works.

    Parsers for the file's extension are tried in order. If none succeeds,
    or the extension has no parsers, the byte-length heuristic is used and
    a warning explains why the numbers are approximate.

    Args:
        file_name: Original file name; only its extension is used
        data: Complete file contents

    Returns:
        Tuple of (geometry, warnings)
    """
    ext = file_extension(file_name)
    warnings: List[str] = []

    for parser in ParserFactory.chain_for(ext):
        start = time.perf_counter()
        try:
            geometry = parser.parse(data)
        except MeshParseError as e:
            logger.debug("parser_failed", parser=e.parser, reason=e.reason, file_name=file_name)
            continue
        log_performance(
            logger,
            f"parse_{parser.name}",
            time.perf_counter() - start,
            triangles=geometry.triangle_count,
            file_name=file_name,
        )
        return geometry, warnings

    if ParserFactory.is_archive(ext):
        warnings.append(
            f"archive formats are not parsed; {ext} files are priced from file size."
        )
    elif not ParserFactory.is_supported(ext):
        warnings.append(f"unsupported file extension '{ext or file_name}'.")

    warnings.append(HEURISTIC_WARNING)
    return estimate_from_size(len(data)), warnings
