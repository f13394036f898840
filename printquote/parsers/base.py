"""Base class shared by the mesh parsers."""

from abc import ABC, abstractmethod

from printquote.core.exceptions import MeshParseError
from printquote.geometry.types import Confidence, Geometry


class MeshParser(ABC):
    """Turns a raw upload buffer into a :class:`Geometry` or fails.

    Parsers are stateless; one instance may serve any number of buffers
    concurrently.
    """

    #: Short identifier used in logs and error messages
    name: str = "mesh"
    #: Confidence attached to geometry this parser produces
    confidence: Confidence = Confidence.MEDIUM

    def parse(self, data: bytes) -> Geometry:
        """Parse a buffer.

        Args:
            data: Complete file contents

        Returns:
            Geometry with at least one triangle

        Raises:
            MeshParseError: If the buffer cannot be decoded by this parser
        """
        try:
            return self._parse_impl(data)
        except MeshParseError:
            raise
        except Exception as e:
            raise MeshParseError(self.name, f"{type(e).__name__}: {e}") from e

    @abstractmethod
    def _parse_impl(self, data: bytes) -> Geometry:
        """Implementation of the parser.

        Args:
            data: Complete file contents

        Returns:
            Geometry with at least one triangle
        """
        pass

    def fail(self, reason: str) -> MeshParseError:
        return MeshParseError(self.name, reason)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
