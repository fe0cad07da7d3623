"""
pixel-brush Configuration
=========================

This module handles configuration loading for pixel-brush.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. Config file (YAML or JSON; JSON is read by the YAML loader)
    3. Default values (lowest priority)

Config File Location:
    1. Explicit path (e.g. --config on the command line)
    2. PB_CONFIG environment variable
    3. ./pb.json

Environment Variable Mapping:
    PB_IMAGE       -> brush.image
    PB_OFFSET_X    -> brush.offset_x
    PB_OFFSET_Y    -> brush.offset_y
    PB_BOTS        -> bots (comma separated)
    PB_LOG_LEVEL   -> logging.level

Example:
    from pixel_brush.config import load_config

    settings = load_config("pb.json")
    print(settings.brush.image)
    print(settings.bots)
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from pixel_brush.canvas.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from pixel_brush.errors import ConfigurationError


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "pb.json"
CONFIG_PATH_ENV = "PB_CONFIG"


# =============================================================================
# Configuration Models
# =============================================================================

class BrushConfig(BaseModel):
    """Source image and where to put it on the canvas."""

    image: str = Field(..., description="Path to the source image")
    offset_x: int = Field(
        ...,
        ge=0,
        lt=CANVAS_WIDTH,
        description="Canvas column of the image's left edge",
    )
    offset_y: int = Field(
        ...,
        ge=0,
        lt=CANVAS_HEIGHT,
        description="Canvas row of the image's top edge",
    )


class PacingConfig(BaseModel):
    """Human-like delay between two pixels of one worker."""

    min_delay_seconds: float = Field(
        default=65.0,
        ge=0,
        description="Lower bound of the jittered delay",
    )
    max_delay_seconds: float = Field(
        default=180.0,
        ge=0,
        description="Upper bound of the jittered delay (inclusive)",
    )
    seed: Optional[int] = Field(
        default=None,
        description="RNG seed for reproducible pacing (None = OS entropy)",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "PacingConfig":
        if self.max_delay_seconds < self.min_delay_seconds:
            raise ValueError("max_delay_seconds must be >= min_delay_seconds")
        return self


class SendConfig(BaseModel):
    """Retry policy for outbound paint commands."""

    max_attempts: int = Field(
        default=5,
        ge=1,
        description="Send attempts per pixel before it is dropped",
    )
    retry_delay_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Fixed delay between two send attempts",
    )


class StreamConfig(BaseModel):
    """WebSocket connection options."""

    ping_interval: Optional[float] = Field(
        default=None,
        gt=0,
        description="Keepalive ping interval in seconds (None = disabled)",
    )
    max_message_size: int = Field(
        default=2 ** 20,
        ge=1,
        description="Maximum inbound message size in bytes",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for pixel-brush.

    Loads configuration from a config file and environment variables.
    Environment variables take precedence over file values.
    """

    brush: BrushConfig
    bots: List[str] = Field(
        ...,
        min_length=1,
        description="Canvas WebSocket endpoints, one worker per entry",
    )
    pacing: PacingConfig = Field(default_factory=PacingConfig)
    send: SendConfig = Field(default_factory=SendConfig)
    stream: StreamConfig = Field(default_factory=StreamConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("bots")
    @classmethod
    def _check_bot_urls(cls, bots: List[str]) -> List[str]:
        for url in bots:
            if not url.startswith(("ws://", "wss://")):
                raise ValueError(f"Endpoint must be a ws:// or wss:// URL: {url}")
        return bots


# =============================================================================
# Configuration Loading
# =============================================================================

def resolve_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
    """Pick the config file: explicit path, then PB_CONFIG, then pb.json."""
    if config_path is not None:
        return Path(config_path)
    if env_path := os.environ.get(CONFIG_PATH_ENV):
        return Path(env_path)
    logger.info(f"{CONFIG_PATH_ENV} var was not present, using default path ({DEFAULT_CONFIG_PATH})")
    return Path(DEFAULT_CONFIG_PATH)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load configuration from a config file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Default values

    Args:
        config_path: Path to the config file. If None, uses PB_CONFIG or pb.json.

    Returns:
        Settings: Loaded configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = resolve_config_path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    logger.info(f"Loading config from: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    _apply_env_overrides(config_data)

    try:
        return Settings.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}:\n{e}") from e


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Brush settings
    if env_image := os.environ.get("PB_IMAGE"):
        config_data.setdefault("brush", {})["image"] = env_image
    if env_x := os.environ.get("PB_OFFSET_X"):
        config_data.setdefault("brush", {})["offset_x"] = env_x
    if env_y := os.environ.get("PB_OFFSET_Y"):
        config_data.setdefault("brush", {})["offset_y"] = env_y

    # Endpoints
    if env_bots := os.environ.get("PB_BOTS"):
        config_data["bots"] = [url.strip() for url in env_bots.split(",") if url.strip()]

    # Logging settings
    if env_log := os.environ.get("PB_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
