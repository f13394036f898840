"""Core configuration and errors for printquote.

The engine lives in :mod:`printquote.core.engine` and is re-exported from the
top-level package.
"""

from printquote.core.config import (
    Config,
    LoggingConfig,
    PricingConfig,
    get_default_config,
    load_config,
    pricing_env_overrides,
)
from printquote.core.exceptions import (
    ConfigurationError,
    EmptyInputError,
    MeshParseError,
    PrintQuoteError,
)

__all__ = [
    # Config classes
    "Config",
    "PricingConfig",
    "LoggingConfig",
    # Config functions
    "get_default_config",
    "load_config",
    "pricing_env_overrides",
    # Exceptions
    "PrintQuoteError",
    "ConfigurationError",
    "MeshParseError",
    "EmptyInputError",
]
