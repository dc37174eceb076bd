"""Tests for the argument builder conventions, and properties that must hold across every operation."""

import pytest

from ghbridge.builder import (
    add_option,
    add_positional,
    add_switch,
    api_path,
    choose,
    clamp_limit,
    or_default,
    repo_spec,
)
from ghbridge.config import Settings
from ghbridge.operations import Catalog, list_operations
from ghbridge.schema import field_type
from ghbridge.validation import InvalidArgument, validate_safe_string

# Smallest valid parameter set for each operation.
MINIMAL = {
    "list_issues": {"owner": "o", "repo": "r"},
    "get_issue": {"owner": "o", "repo": "r", "issue_number": 1},
    "create_issue": {"owner": "o", "repo": "r", "title": "T"},
    "close_issue": {"owner": "o", "repo": "r", "issue_number": 1},
    "comment_on_issue": {"owner": "o", "repo": "r", "issue_number": 1, "body": "B"},
    "search_issues": {"query": "bug"},
    "list_pull_requests": {"owner": "o", "repo": "r"},
    "get_pull_request": {"owner": "o", "repo": "r", "pr_number": 1},
    "get_pull_request_diff": {"owner": "o", "repo": "r", "pr_number": 1},
    "create_pull_request": {"owner": "o", "repo": "r", "title": "T", "head": "h"},
    "merge_pull_request": {"owner": "o", "repo": "r", "pr_number": 1},
    "list_releases": {"owner": "o", "repo": "r"},
    "get_release": {"owner": "o", "repo": "r"},
    "create_release": {"owner": "o", "repo": "r", "tag": "v1"},
    "list_workflows": {"owner": "o", "repo": "r"},
    "list_workflow_runs": {"owner": "o", "repo": "r"},
    "get_workflow_run": {"owner": "o", "repo": "r", "run_id": 1},
    "trigger_workflow": {"owner": "o", "repo": "r", "workflow": "ci.yml"},
    "list_branches": {"owner": "o", "repo": "r"},
    "create_branch": {"owner": "o", "repo": "r", "branch_name": "b"},
    "delete_branch": {"owner": "o", "repo": "r", "branch_name": "b"},
    "get_repository": {"owner": "o", "repo": "r"},
    "list_repositories": {},
    "search_repositories": {"query": "q"},
    "get_commit_history": {"owner": "o", "repo": "r"},
    "get_file_contents": {"owner": "o", "repo": "r", "path": "README.md"},
    "get_me": {},
}

LIMITED = ["search_issues", "list_releases", "list_workflow_runs", "search_repositories", "get_commit_history"]


@pytest.fixture
def cat():
    return Catalog(Settings())


def _optional_string_fields(op):
    required = set(op.params.REQUIRED) | set(op.params.REQUIRED_TEXT)
    return [
        name for name, field in op.params.model_fields.items()
        if field_type(field.annotation) is str and name not in required
    ]


# --- conventions ---


def test_repo_spec_and_api_path():
    assert repo_spec("o", "r") == "o/r"
    assert api_path("o", "r", "git", "refs") == "repos/o/r/git/refs"


@pytest.mark.parametrize("value", [None, "", "   ", "\n"])
def test_add_option_omits_absent_and_blank(value):
    assert add_option(["x"], "--body", value) == ["x"]


def test_add_option_keeps_value_verbatim():
    assert add_option([], "--title", " padded ") == ["--title", " padded "]
    assert add_option([], "--limit", 5) == ["--limit", "5"]


def test_add_positional():
    assert add_positional(["release", "view"], None) == ["release", "view"]
    assert add_positional(["release", "view"], "v1.0") == ["release", "view", "v1.0"]


def test_add_switch_only_when_true():
    assert add_switch([], "--draft", True) == ["--draft"]
    assert add_switch([], "--draft", False) == []
    assert add_switch([], "--draft", None) == []


@pytest.mark.parametrize("value,expected", [
    (None, 30), (0, 30), (-5, 30), (5, 10), (10, 10), (50, 50),
])
def test_clamp_limit_with_floor(value, expected):
    assert clamp_limit(value, 30, floor=10) == expected


def test_clamp_limit_default_floor_is_one():
    assert clamp_limit(1, 10) == 1
    assert clamp_limit(0, 10) == 10


@pytest.mark.parametrize("value,expected", [
    ("SQUASH", "squash"), ("Rebase", "rebase"), (" merge ", "merge"),
    ("fast-forward", "merge"), (None, "merge"), ("", "merge"),
])
def test_choose_is_case_insensitive_with_fallback(value, expected):
    assert choose(value, ("merge", "squash", "rebase"), "merge") == expected


def test_or_default():
    assert or_default(None, "main") == "main"
    assert or_default("  ", "main") == "main"
    assert or_default("develop", "main") == "develop"


# --- properties across the whole catalog ---


def test_minimal_table_covers_catalog():
    assert set(MINIMAL) == {op.name for op in list_operations()}


@pytest.mark.parametrize("op", list_operations(), ids=lambda op: op.name)
def test_no_flag_followed_by_blank_value(cat, op):
    params = dict(MINIMAL[op.name])
    for name in _optional_string_fields(op):
        params[name] = "   "
    tokens = cat.build(op.name, **params)
    for i, tok in enumerate(tokens):
        if tok.startswith("--") and i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
            assert tokens[i + 1].strip(), f"{tok} followed by blank value in {tokens}"
    assert all(t != "" for t in tokens)


@pytest.mark.parametrize("op", list_operations(), ids=lambda op: op.name)
def test_absent_optional_string_is_same_as_omitted(cat, op):
    baseline = cat.build(op.name, **MINIMAL[op.name])
    for name in _optional_string_fields(op):
        for absent in (None, "", "  "):
            params = dict(MINIMAL[op.name], **{name: absent})
            assert cat.build(op.name, **params) == baseline, f"{op.name}.{name}={absent!r}"


@pytest.mark.parametrize("name", LIMITED)
@pytest.mark.parametrize("limit", [None, 0, -1, -1000])
def test_non_positive_limit_yields_configured_default(name, limit):
    settings = Settings(commit_limit=7, search_limit=42, list_limit=25)
    expected = {
        "search_issues": "42",
        "search_repositories": "42",
        "list_releases": "25",
        "list_workflow_runs": "25",
        "get_commit_history": "per_page=7",
    }[name]
    tokens = Catalog(settings).build(name, **dict(MINIMAL[name], limit=limit))
    if name == "get_commit_history":
        assert expected in tokens[1]
    else:
        assert tokens[tokens.index("--limit") + 1] == expected


@pytest.mark.parametrize("value", [
    "bug", "good first issue", "área", "a/b", "x;y", "a&b", "p|q", "`id`", "$HOME", "c:\\d", "l1\nl2", "r\r",
])
def test_validator_and_builder_agree(cat, value):
    """Either both reject, or both accept and the value reaches gh unchanged."""
    try:
        validate_safe_string(value, "label")
    except InvalidArgument:
        with pytest.raises(InvalidArgument):
            cat.build("list_issues", owner="o", repo="r", label=value)
        return
    tokens = cat.build("list_issues", owner="o", repo="r", label=value)
    assert tokens[tokens.index("--label") + 1] == value
