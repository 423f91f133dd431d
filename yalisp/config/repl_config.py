"""Loads ReplConfig from explicit overrides, then YALISP_* environment variables, then defaults."""
import logging
import os
from typing import Any, Dict, Mapping, Optional

from yalisp.system.models import ReplConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "YALISP_"
_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_value(field: str, raw: str) -> Any:
    if field == "fix_minus_message":
        return raw.strip().lower() in _TRUE_VALUES
    return raw


def load_config(overrides: Optional[Dict[str, Any]] = None,
                environ: Optional[Mapping[str, str]] = None) -> ReplConfig:
    """
    Builds the shell configuration.

    Each field is taken from `overrides` when present there and not None,
    otherwise from the matching YALISP_<FIELD> environment variable,
    otherwise from the ReplConfig default.

    Raises:
        pydantic.ValidationError: If a resolved value is invalid.
    """
    overrides = overrides or {}
    environ = os.environ if environ is None else environ

    values: Dict[str, Any] = {}
    for field in ReplConfig.model_fields:
        if overrides.get(field) is not None:
            values[field] = overrides[field]
            continue
        env_name = f"{ENV_PREFIX}{field.upper()}"
        if env_name in environ:
            logger.debug(f"Config '{field}' taken from environment variable {env_name}")
            values[field] = _env_value(field, environ[env_name])

    config = ReplConfig(**values)
    logger.debug(f"Loaded config: {config.model_dump()}")
    return config
