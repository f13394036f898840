"""Extension table mapping file types to ordered parser chains."""

from typing import Dict, Tuple, Type

from printquote.parsers.ascii_stl import AsciiSTLParser
from printquote.parsers.base import MeshParser
from printquote.parsers.binary_stl import BinarySTLParser
from printquote.parsers.obj import OBJParser


def normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class ParserFactory:
    """Factory for the per-extension fallback chains.

    Each chain is tried in order; the first parser that returns a geometry
    wins. Archive formats are known but map to an empty chain, so they are
    always priced by the size heuristic.
    """

    _chains: Dict[str, Tuple[Type[MeshParser], ...]] = {
        ".stl": (BinarySTLParser, AsciiSTLParser),
        ".obj": (OBJParser,),
    }

    _archive_extensions = frozenset({".3mf", ".amf", ".zip"})

    @classmethod
    def chain_for(cls, extension: str) -> Tuple[MeshParser, ...]:
        """Create the parser chain for an extension.

        Args:
            extension: File extension, with or without the leading dot

        Returns:
            Parser instances in the order they should be tried (possibly empty)
        """
        ext = normalize_extension(extension)
        return tuple(parser_class() for parser_class in cls._chains.get(ext, ()))

    @classmethod
    def is_archive(cls, extension: str) -> bool:
        return normalize_extension(extension) in cls._archive_extensions

    @classmethod
    def is_supported(cls, extension: str) -> bool:
        return normalize_extension(extension) in cls._chains

    @classmethod
    def register(cls, extension: str, *parser_classes: Type[MeshParser]) -> None:
        """Register (or replace) the parser chain for an extension.

        Args:
            extension: File extension
            *parser_classes: Parser classes in fallback order
        """
        cls._chains[normalize_extension(extension)] = tuple(parser_classes)

    @classmethod
    def available_formats(cls) -> Dict[str, list[str]]:
        """Map each supported extension to the names of its parsers."""
        return {
            ext: [parser_class.name for parser_class in chain]
            for ext, chain in sorted(cls._chains.items())
        }
