"""
Settings consumed by the operation catalog.

One immutable value, built once (from the environment and CLI flags) and
passed into the catalog. Unset or unusable values fall back to the defaults
below instead of failing.
"""

import math
import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationInfo, field_validator

from .executor import DEFAULT_TIMEOUT

ENV_PREFIX = "GHBRIDGE_"

# env suffix -> settings field
_ENV_FIELDS = {
    "DEFAULT_BRANCH": "default_branch",
    "TIMEOUT": "timeout",
    "COMMIT_LIMIT": "commit_limit",
    "SEARCH_LIMIT": "search_limit",
    "LIST_LIMIT": "list_limit",
    "GH": "gh_binary",
}


def _positive(value: Any, cast: type) -> Optional[Any]:
    """Return value as a positive finite `cast`, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = cast(str(value).strip()) if isinstance(value, str) else cast(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number if number > 0 else None


class Settings(BaseModel):
    """Defaults for branch names, limits and the command timeout."""

    default_branch: str = "main"
    timeout: float = DEFAULT_TIMEOUT  # seconds, launch to exit
    commit_limit: int = 10
    search_limit: int = 30
    list_limit: int = 30
    gh_binary: str = "gh"

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("default_branch", "gh_binary", mode="before")
    @classmethod
    def _blank_string_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or not str(value).strip():
            return cls.model_fields[info.field_name].default
        return str(value).strip()

    @field_validator("timeout", mode="before")
    @classmethod
    def _bad_timeout_to_default(cls, value: Any) -> Any:
        number = _positive(value, float)
        return DEFAULT_TIMEOUT if number is None else number

    @field_validator("commit_limit", "search_limit", "list_limit", mode="before")
    @classmethod
    def _bad_limit_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        number = _positive(value, int)
        return cls.model_fields[info.field_name].default if number is None else number


def load_settings(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> Settings:
    """Build Settings from GHBRIDGE_* variables; non-None overrides win over the environment."""
    if environ is None:
        environ = os.environ
    values = {}
    for suffix, field in _ENV_FIELDS.items():
        raw = environ.get(ENV_PREFIX + suffix)
        if raw is not None:
            values[field] = raw
    for field, value in overrides.items():
        if value is not None:
            values[field] = value
    return Settings(**values)
