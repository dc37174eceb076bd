"""Tests for settings defaults, environment loading and fallbacks."""

import pytest
from pydantic import ValidationError

from ghbridge.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.default_branch == "main"
    assert s.timeout == 30
    assert s.commit_limit == 10
    assert s.search_limit == 30
    assert s.list_limit == 30
    assert s.gh_binary == "gh"


@pytest.mark.parametrize("field,bad,expected", [
    ("default_branch", None, "main"),
    ("default_branch", "   ", "main"),
    ("gh_binary", "", "gh"),
    ("timeout", 0, 30),
    ("timeout", -1, 30),
    ("timeout", "soon", 30),
    ("timeout", float("inf"), 30),
    ("commit_limit", 0, 10),
    ("commit_limit", "ten", 10),
    ("search_limit", -7, 30),
    ("list_limit", None, 30),
])
def test_invalid_values_fall_back(field, bad, expected):
    assert getattr(Settings(**{field: bad}), field) == expected


def test_valid_values_kept():
    s = Settings(default_branch=" develop ", timeout="2.5", commit_limit="5", search_limit=100)
    assert s.default_branch == "develop"
    assert s.timeout == 2.5
    assert s.commit_limit == 5
    assert s.search_limit == 100


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(ValidationError):
        s.default_branch = "trunk"


def test_load_from_environment():
    env = {
        "GHBRIDGE_DEFAULT_BRANCH": "trunk",
        "GHBRIDGE_TIMEOUT": "12",
        "GHBRIDGE_COMMIT_LIMIT": "4",
        "GHBRIDGE_SEARCH_LIMIT": "abc",
        "GHBRIDGE_LIST_LIMIT": "15",
        "GHBRIDGE_GH": "/usr/local/bin/gh",
        "UNRELATED": "x",
    }
    s = load_settings(env)
    assert s.default_branch == "trunk"
    assert s.timeout == 12
    assert s.commit_limit == 4
    assert s.search_limit == 30
    assert s.list_limit == 15
    assert s.gh_binary == "/usr/local/bin/gh"


def test_overrides_win_and_none_is_ignored():
    env = {"GHBRIDGE_DEFAULT_BRANCH": "trunk", "GHBRIDGE_TIMEOUT": "12"}
    s = load_settings(env, default_branch="develop", timeout=None)
    assert s.default_branch == "develop"
    assert s.timeout == 12


def test_empty_environment_gives_defaults():
    assert load_settings({}) == Settings()
