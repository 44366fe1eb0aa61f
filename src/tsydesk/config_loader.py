"""Configuration loader with Pydantic validation and environment variable interpolation."""

from __future__ import annotations

import os
import re
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables at module level
load_dotenv(find_dotenv(usecwd=True))

from tsydesk.constants import (
    DEFAULT_AGGRESSIVENESS_THRESHOLD,
    DEFAULT_BOOKS,
    DEFAULT_GUI_MAX_UPDATES,
    DEFAULT_GUI_THROTTLE_MS,
    DEFAULT_HIDDEN_MULTIPLIER,
    DEFAULT_QUOTE_PRICE,
    DEFAULT_VENUE,
    DEFAULT_VISIBLE_QUANTITY_UNIT,
    ListenerErrorPolicy,
    LogLevel,
    Market,
)


def interpolate_env_vars(value: Any) -> Any:
    """
    Interpolate environment variables in string values.

    Supports formats:
    - ${VAR_NAME} - replaced by an empty string when unset
    - ${VAR_NAME:default} - optional with default value
    """
    if not isinstance(value, str):
        return value

    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value
        elif default is not None:
            return default
        else:
            return ""

    return re.sub(pattern, replacer, value)


def process_config_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively process config dict to interpolate env vars."""
    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = process_config_dict(value)
        elif isinstance(value, list):
            result[key] = [
                process_config_dict(item) if isinstance(item, dict) else interpolate_env_vars(item)
                for item in value
            ]
        else:
            result[key] = interpolate_env_vars(value)
    return result


def _to_decimal(v: Any) -> Decimal:
    if isinstance(v, Decimal):
        return v
    if isinstance(v, str) and "/" in v:
        # Allow fractions such as "1/128" in YAML
        num, den = v.split("/", 1)
        return Decimal(num.strip()) / Decimal(den.strip())
    return Decimal(str(v))


# ============================================
# Pydantic Configuration Models
# ============================================


class EnvironmentConfig(BaseModel):
    """Environment and runtime settings."""

    log_level: LogLevel = LogLevel.INFO
    data_dir: str = "./data"
    output_dir: str = "./output"


class FeedsConfig(BaseModel):
    """Input feed file names, relative to environment.data_dir."""

    prices: str = "prices.txt"
    trades: str = "trades.txt"
    market_data: str = "marketdata.txt"
    inquiries: str = "inquiries.txt"


class FrameworkConfig(BaseModel):
    """Listener fan-out behaviour shared by every service."""

    listener_errors: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE


class StreamingConfig(BaseModel):
    """Algo streaming quote sizing."""

    visible_quantity_unit: int = DEFAULT_VISIBLE_QUANTITY_UNIT
    hidden_multiplier: int = DEFAULT_HIDDEN_MULTIPLIER

    @field_validator("visible_quantity_unit", "hidden_multiplier")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate sizes are positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got: {v}")
        return v


class AlgoExecutionConfig(BaseModel):
    """Algo execution trigger settings."""

    aggressiveness_threshold: Decimal = DEFAULT_AGGRESSIVENESS_THRESHOLD
    spread_tolerance: Decimal = Decimal("0")  # 0 keeps the exact-equality trigger

    @field_validator("aggressiveness_threshold", "spread_tolerance", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        """Convert numeric or fraction values to Decimal."""
        return _to_decimal(v)

    @field_validator("spread_tolerance")
    @classmethod
    def validate_tolerance(cls, v: Decimal) -> Decimal:
        """Validate tolerance is non-negative."""
        if v < 0:
            raise ValueError(f"Tolerance must be non-negative, got: {v}")
        return v


class ExecutionConfig(BaseModel):
    """Execution venue settings."""

    venue: Market = DEFAULT_VENUE


class BookingConfig(BaseModel):
    """Trade booking settings."""

    books: list[str] = Field(default_factory=lambda: list(DEFAULT_BOOKS))

    @field_validator("books")
    @classmethod
    def validate_books(cls, v: list[str]) -> list[str]:
        """Validate at least one book is configured."""
        if not v:
            raise ValueError("At least one book must be configured")
        return v


class InquiryConfig(BaseModel):
    """Customer inquiry settings."""

    quote_price: Decimal = DEFAULT_QUOTE_PRICE

    @field_validator("quote_price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Decimal:
        return _to_decimal(v)


class GUIConfig(BaseModel):
    """Throttled GUI snapshot sink."""

    throttle_ms: int = DEFAULT_GUI_THROTTLE_MS
    max_updates: int = DEFAULT_GUI_MAX_UPDATES
    file_name: str = "gui.txt"

    @field_validator("throttle_ms", "max_updates")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Value must be non-negative, got: {v}")
        return v


class HistoryConfig(BaseModel):
    """Historical sink file names, relative to environment.output_dir."""

    streaming: str = "streaming.txt"
    positions: str = "positions.txt"
    risk: str = "risk.txt"
    executions: str = "executions.txt"
    inquiries: str = "allinquiries.txt"


class AppConfig(BaseModel):
    """Root application configuration."""

    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)
    feeds: FeedsConfig = Field(default_factory=FeedsConfig)
    framework: FrameworkConfig = Field(default_factory=FrameworkConfig)
    streaming: StreamingConfig = Field(default_factory=StreamingConfig)
    algo_execution: AlgoExecutionConfig = Field(default_factory=AlgoExecutionConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    booking: BookingConfig = Field(default_factory=BookingConfig)
    inquiry: InquiryConfig = Field(default_factory=InquiryConfig)
    gui: GUIConfig = Field(default_factory=GUIConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    @property
    def data_path(self) -> Path:
        return Path(self.environment.data_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.environment.output_dir)


# ============================================
# Configuration Loader
# ============================================


class ConfigLoader:
    """Load and validate configuration from YAML files with env var interpolation."""

    def __init__(self, config_path: str | Path) -> None:
        """
        Initialize config loader.

        Args:
            config_path: Path to the YAML configuration file.
        """
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """
        Load and validate configuration.

        Returns:
            Validated AppConfig instance.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            pydantic.ValidationError: If config validation fails.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raw_config = {}

        processed_config = process_config_dict(raw_config)

        self._config = AppConfig.model_validate(processed_config)

        return self._config

    @property
    def config(self) -> AppConfig:
        """Get loaded config, loading if necessary."""
        if self._config is None:
            return self.load()
        return self._config

    def reload(self) -> AppConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()


def load_config(config_path: str | Path) -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Validated AppConfig instance.
    """
    loader = ConfigLoader(config_path)
    return loader.load()


def load_config_with_overrides(
    config_path: str | Path | None,
    *,
    data_dir: str | None = None,
    output_dir: str | None = None,
    log_level: str | None = None,
    listener_errors: str | None = None,
) -> AppConfig:
    """
    Load configuration with CLI overrides.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults.
        data_dir: Override input feed directory.
        output_dir: Override sink output directory.
        log_level: Override log level.
        listener_errors: Override listener error policy.

    Returns:
        Validated AppConfig instance with overrides applied.
    """
    config = load_config(config_path) if config_path is not None else AppConfig()

    env_updates: dict[str, Any] = {}
    if data_dir is not None:
        env_updates["data_dir"] = data_dir
    if output_dir is not None:
        env_updates["output_dir"] = output_dir
    if log_level is not None:
        env_updates["log_level"] = LogLevel(log_level.upper())

    updates: dict[str, Any] = {}
    if env_updates:
        updates["environment"] = config.environment.model_copy(update=env_updates)

    if listener_errors is not None:
        policy = ListenerErrorPolicy(listener_errors.lower())
        updates["framework"] = config.framework.model_copy(update={"listener_errors": policy})

    if updates:
        return config.model_copy(update=updates)

    return config
