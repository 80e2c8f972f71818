"""Run settings, optionally loaded from a YAML file.

Example file:
    delimiter: "|"
    precision: 2
    log_level: INFO
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    """Defaults reproduce the plain "|"-delimited, two-decimal report."""

    model_config = ConfigDict(extra="forbid")

    delimiter: str = Field(default="|", min_length=1, max_length=1)
    precision: int = Field(default=2, ge=0, le=12)
    log_level: LogLevel = "WARNING"


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file, or return the defaults."""
    if path is None:
        return Settings()

    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e
