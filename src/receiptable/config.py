"""Configuration management for Receiptable."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from receiptable.models.options import HexDecodeOptions, RasterOptions
from receiptable.models.printer import PrinterEndpointConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Application configuration loaded from config.yaml."""

    printer: PrinterEndpointConfig = Field(default_factory=PrinterEndpointConfig)
    # Defaults for hex text typed into the API
    hex_input: HexDecodeOptions = Field(default_factory=HexDecodeOptions)
    raster: RasterOptions = Field(default_factory=RasterOptions)
    # Renderer as "module:ClassName" (optional, rendering is disabled if not set)
    renderer: str | None = None
    # API key for external access (optional, if not set API is open)
    api_key: str | None = None


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(
        env_prefix="RECEIPTABLE_",
        env_file=".env",
        extra="ignore",
    )

    config_file: Path = Path("config.yaml")
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False


def load_config(config_path: Path) -> AppConfig:
    """Load application configuration from YAML file."""
    if not config_path.exists():
        logger.info(f"No config file at {config_path}, using defaults")
        return AppConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # YAML returns None for empty sections
    for section in ("printer", "hex_input", "raster"):
        if data.get(section) is None:
            data.pop(section, None)

    return AppConfig.model_validate(data)


# Global settings instance
settings = Settings()
