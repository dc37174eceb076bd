"""
Parameter validation run before any argument list is built.

Arguments are never passed through a shell, but some of them end up inside
API paths and query strings, so identifiers carrying shell metacharacters are
refused outright rather than passed along. Values pasted into a REST path
must also stay inside it, and positional values must not look like flags.
"""

from typing import Optional


class InvalidArgument(ValueError):
    """A parameter value is malformed or unsafe."""


class MissingArgument(ValueError):
    """A required parameter is absent or blank."""


# "$(" is covered by "$".
FORBIDDEN_CHARS = (";", "&", "|", "`", "$", "\\", "\n", "\r")
# Characters that end or re-encode the path part of a REST endpoint.
PATH_CHARS = ("?", "#", "%")


def validate_safe_string(value: Optional[str], field: str) -> None:
    """Raise InvalidArgument if value contains a shell metacharacter. None passes."""
    if value is None:
        return
    for ch in FORBIDDEN_CHARS:
        if ch in value:
            raise InvalidArgument(f"Parameter '{field}' contains invalid characters: {value!r}")


def validate_required(value: Optional[str], field: str) -> None:
    """Raise MissingArgument on None or blank, then apply the deny-list."""
    if value is None or not value.strip():
        raise MissingArgument(f"Parameter '{field}' cannot be null or empty")
    validate_safe_string(value, field)


def validate_not_option(value: Optional[str], field: str) -> None:
    """Raise InvalidArgument if a positional value would be read by gh as a flag."""
    if value is not None and value.startswith("-"):
        raise InvalidArgument(f"Parameter '{field}' must not start with '-': {value!r}")


def validate_path(value: Optional[str], field: str, nested: bool = True) -> None:
    """Raise InvalidArgument if value would change the REST endpoint it is placed in.

    Query and fragment separators, percent escapes and empty or dot segments
    are refused. With nested=False the value must be a single segment. None and
    blank values pass; they are omitted by the builder.
    """
    if value is None or not value.strip():
        return
    bad = any(ch in value for ch in PATH_CHARS) or (not nested and "/" in value)
    if bad or any(seg in ("", ".", "..") for seg in value.split("/")):
        raise InvalidArgument(f"Parameter '{field}' is not a valid path: {value!r}")


def validate_name(value: Optional[str], field: str) -> None:
    """Owner and repository names: one path segment, not starting with '-'."""
    validate_path(value, field, nested=False)
    validate_not_option(value, field)


def validate_positive(value: Optional[int], field: str) -> None:
    """Raise InvalidArgument when value is zero or negative; MissingArgument when None."""
    if value is None:
        raise MissingArgument(f"Parameter '{field}' cannot be null")
    if value <= 0:
        raise InvalidArgument(f"Parameter '{field}' must be positive, got: {value}")
