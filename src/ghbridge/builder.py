"""
Argument builder conventions shared by every operation.

Token order matters to gh. Optional flags are appended only when they carry a
value; a flag is never followed by an empty string. Values are appended
verbatim: whatever passed validation is exactly what gh receives.
"""

from typing import Iterable, List, Optional, Union

Value = Union[str, int, None]


def repo_spec(owner: str, repo: str) -> str:
    """Combined identifier gh expects for --repo and `repo view`."""
    return f"{owner}/{repo}"


def api_path(owner: str, repo: str, *parts: str) -> str:
    """REST path under repos/<owner>/<repo>."""
    return "/".join(("repos", owner, repo) + parts)


def is_blank(value: Value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def or_default(value: Optional[str], default: str) -> str:
    return default if is_blank(value) else value


def add_option(args: List[str], flag: str, value: Value) -> List[str]:
    """Append `flag value` unless value is None or a blank string."""
    if not is_blank(value):
        args.extend([flag, str(value)])
    return args


def add_positional(args: List[str], value: Value) -> List[str]:
    if not is_blank(value):
        args.append(str(value))
    return args


def add_switch(args: List[str], flag: str, enabled: Optional[bool]) -> List[str]:
    """Append the bare flag when enabled; false is expressed by absence."""
    if enabled:
        args.append(flag)
    return args


def clamp_limit(value: Optional[int], default: int, floor: int = 1) -> int:
    """Absent, zero or negative -> default; positive but under floor -> floor."""
    if value is None or value <= 0:
        return default
    return max(value, floor)


def choose(value: Optional[str], choices: Iterable[str], default: str) -> str:
    """Case-insensitive pick from a closed set; anything else falls back to default."""
    if is_blank(value):
        return default
    wanted = value.strip().lower()
    for choice in choices:
        if choice.lower() == wanted:
            return choice
    return default
