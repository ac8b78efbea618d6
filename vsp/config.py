"""
Portal settings and logging setup.

Settings come from an optional JSON file, then ``VSP_*`` environment
variables (``VSP_EMAIL_DOMAIN``, ``VSP_BADGE_PREFIX``, ``VSP_MAX_BATCH_SIZE``,
``VSP_LOG_LEVEL``, ``VSP_HOST``, ``VSP_PORT``).
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .core.exceptions import ConfigurationError


ENV_PREFIX = "VSP_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class PortalSettings(BaseModel):
    email_domain: str = Field("vincollins.edu.ng", min_length=3, pattern=r"^[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
    badge_prefix: str = Field("VC", min_length=1, max_length=5, pattern=r"^[A-Z]+$")
    max_batch_size: int = Field(100, ge=1, le=10000)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)
    # Last issued sequence per allocator key, for resuming numbering after a migration.
    sequence_seeds: Dict[str, int] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("sequence_seeds")
    @classmethod
    def _non_negative_seeds(cls, value: Dict[str, int]) -> Dict[str, int]:
        for key, sequence in value.items():
            if sequence < 0:
                raise ValueError(f"seed for {key!r} cannot be negative")
        return value


def _env_overrides(environ) -> Dict[str, Any]:
    overrides = {}
    for name in PortalSettings.model_fields:
        if name == "sequence_seeds":
            continue
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None and value.strip():
            overrides[name] = value.strip()
    return overrides


def load_settings(path: Optional[str] = None, environ=None) -> PortalSettings:
    """Load settings from a JSON file and the environment."""
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}
    if path:
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must hold a JSON object")
    data.update(_env_overrides(environ))
    try:
        return PortalSettings(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", details={"errors": e.errors()})


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
