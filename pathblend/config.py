"""Library configuration from environment variables."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "warning"

    # Buffer construction
    reject_non_finite: bool = True

    # Conic -> quad conversion tolerance for SVG output
    conic_tolerance: float = 0.25

    # Sampling density
    arc_samples: int = 16  # line segments per elliptical arc when parsing

    model_config = {"env_prefix": "PATHBLEND_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def get_settings() -> Settings:
    return settings


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for scripts and tests. Libraries never call this on import."""
    load_dotenv()
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
