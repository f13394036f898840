"""Configuration management for printquote using Pydantic."""

import os
from pathlib import Path
from typing import Any, Literal, Mapping, Optional

import tomli
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from printquote.core.exceptions import ConfigurationError

# Environment variables understood by the pricing service, mapped to fields.
PRICING_ENV_VARS = {
    "PRICING_MATERIAL_COST_PLA": "material_cost_per_gram",
    "PRICING_MACHINE_RATE": "machine_rate_per_hour",
    "PRICING_SETUP_FEE": "setup_fee",
    "PRICING_PRINT_SPEED": "print_speed",
}


class PricingConfig(BaseModel):
    """Rates used to turn geometry into a price."""

    model_config = ConfigDict(frozen=True)

    material_cost_per_gram: float = Field(
        0.12, ge=0, description="Material cost per gram of filament"
    )
    machine_rate_per_hour: float = Field(
        12.5, ge=0, description="Machine time cost per hour"
    )
    setup_fee: float = Field(4.5, ge=0, description="Flat fee added to every job")
    print_speed: float = Field(
        5500.0,
        ge=0,
        description="Throughput in mm^3 per hour (0 disables the time floor)",
    )
    material: str = Field("PLA", min_length=1, description="Material label")
    density_g_cm3: float = Field(
        1.24, gt=0, description="Material density used for mass estimation"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Logging level"
    )
    format: Literal["json", "console", "plain"] = Field(
        "console", description="Log format"
    )
    timestamp_format: str = Field("iso", description="structlog TimeStamper format")
    colorize: bool = Field(True, description="Colorize console output on a TTY")
    add_caller_info: bool = Field(
        False, description="Add filename, line number and function to records"
    )
    log_file: Optional[Path] = Field(None, description="Optional JSON log file")


class Config(BaseModel):
    """Main configuration for printquote."""

    model_config = ConfigDict(frozen=True)

    pricing: PricingConfig = Field(
        default_factory=PricingConfig, description="Pricing configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> "Config":
        """Load configuration from TOML file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            tomli.TOMLDecodeError: If TOML is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "rb") as f:
            data = tomli.load(f)

        return cls(**data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create configuration from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict:
        """Convert configuration to a TOML-friendly dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_toml(self, path: Path | str) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save TOML file
        """
        import tomli_w

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(self.to_dict(), f)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()


def pricing_env_overrides(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Collect pricing overrides from ``PRICING_*`` environment variables.

    Empty variables are ignored. Values that are not numbers raise
    :class:`ConfigurationError` instead of silently becoming zero.
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for var, field_name in PRICING_ENV_VARS.items():
        raw = environ.get(var, "")
        if not raw:
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError:
            raise ConfigurationError(
                f"Invalid {var}: {raw!r} is not a number",
                details={"variable": var, "value": raw},
            ) from None
    return overrides


def _merge(base: dict, extra: Mapping[str, Any]) -> dict:
    for key, value in extra.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = dict(value) if isinstance(value, Mapping) else value
    return base


def load_config(
    path: Optional[Path | str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    use_env: bool = True,
) -> Config:
    """Load configuration from defaults, file, environment and overrides.

    Later layers win: defaults, then the TOML file, then ``PRICING_*``
    environment variables, then ``overrides``.

    Args:
        path: Optional path to configuration file
        overrides: Nested mapping applied last, e.g. ``{"pricing": {...}}``
        use_env: Whether to read ``PRICING_*`` environment variables

    Returns:
        Config instance

    Raises:
        ConfigurationError: If any layer produces an invalid configuration
    """
    data: dict = {}
    if path:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e
    if use_env:
        env = pricing_env_overrides()
        if env:
            _merge(data, {"pricing": env})
    if overrides:
        _merge(data, overrides)

    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e
