"""Mesh file parsers for printquote."""

from printquote.parsers.ascii_stl import AsciiSTLParser
from printquote.parsers.base import MeshParser
from printquote.parsers.binary_stl import BinarySTLParser
from printquote.parsers.factory import ParserFactory
from printquote.parsers.obj import OBJParser

__all__ = [
    "MeshParser",
    "ParserFactory",
    "BinarySTLParser",
    "AsciiSTLParser",
    "OBJParser",
]
