"""Server configuration loaded from environment variables."""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openapi.programming-hero.com/api"


class Settings(BaseModel):
    """Runtime settings."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Plant catalog API base URL")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    log_level: str = Field(default="INFO", description="Logging level name")


def load_settings(environ: Optional[dict[str, str]] = None) -> Settings:
    """
    Build settings from the environment.

    Reads PLANT_API_BASE_URL, PLANT_API_TIMEOUT and PLANT_LOG_LEVEL. If any
    value is invalid, the error is logged and the defaults are used.
    """
    if environ is None:
        environ = dict(os.environ)

    values = {}
    if environ.get("PLANT_API_BASE_URL"):
        values["base_url"] = environ["PLANT_API_BASE_URL"].rstrip("/")
    if environ.get("PLANT_API_TIMEOUT"):
        values["timeout"] = environ["PLANT_API_TIMEOUT"]
    if environ.get("PLANT_LOG_LEVEL"):
        values["log_level"] = environ["PLANT_LOG_LEVEL"].upper()

    try:
        return Settings(**values)
    except ValidationError as e:
        logger.warning(f"Invalid configuration, using defaults: {e}")
        return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure root logging at the configured level."""
    level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level)
