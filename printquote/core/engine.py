"""Estimation engine: the single entry point used by the web service."""

from datetime import datetime
from typing import List, Optional, Tuple

from printquote.core.config import PricingConfig
from printquote.core.dispatcher import analyse_geometry
from printquote.core.exceptions import EmptyInputError
from printquote.pricing.estimate import Estimate
from printquote.pricing.model import price
from printquote.utils.logging import StructuredLogger, get_logger, log_estimate_result

logger = get_logger(__name__)


class QuoteEngine:
    """Stateless estimator for uploaded model files.

    The engine only holds a default :class:`PricingConfig`, which is
    immutable, so a single instance can be shared by any number of
    concurrent request handlers.
    """

    def __init__(self, config: Optional[PricingConfig] = None):
        """Initialize engine.

        Args:
            config: Default rates used when ``estimate`` is called without one
        """
        self.config = config or PricingConfig()

    def estimate(
        self,
        file_name: str,
        data: bytes,
        config: Optional[PricingConfig] = None,
        *,
        generated_at: Optional[datetime] = None,
    ) -> Tuple[Estimate, List[str]]:
        """Estimate mass, print time and price for an uploaded file.

        Parse failures never escape: the engine falls back to the size
        heuristic and reports why in the warnings.

        Args:
            file_name: Original upload name, used to pick a parser
            data: Complete file contents
            config: Rates for this call (defaults to the engine's config)
            generated_at: Pin ``metadata.generatedAt`` (defaults to now)

        Returns:
            Tuple of (estimate, warnings); the warnings are also on the estimate

        Raises:
            EmptyInputError: If ``data`` is empty
        """
        if not data:
            raise EmptyInputError(file_name)
        config = config or self.config

        with StructuredLogger(logger, "estimate", file_name=file_name, size=len(data)) as op:
            geometry, warnings = analyse_geometry(file_name, data)
            op.update_context(confidence=geometry.confidence.value)
            result = price(
                geometry,
                config,
                file_name=file_name,
                file_size_bytes=len(data),
                warnings=warnings,
                generated_at=generated_at,
            )

        log_estimate_result(logger, result)
        return result, list(result.warnings)


def estimate(
    file_name: str,
    data: bytes,
    config: Optional[PricingConfig] = None,
    *,
    generated_at: Optional[datetime] = None,
) -> Tuple[Estimate, List[str]]:
    """Convenience function to estimate a single upload.

    Args:
        file_name: Original upload name
        data: Complete file contents
        config: Rates to apply (defaults to :class:`PricingConfig`)
        generated_at: Pin ``metadata.generatedAt``

    Returns:
        Tuple of (estimate, warnings)
    """
    return QuoteEngine(config).estimate(file_name, data, generated_at=generated_at)
