"""Tests for the input validator."""

import pytest

from ghbridge.validation import (
    FORBIDDEN_CHARS,
    InvalidArgument,
    MissingArgument,
    validate_name,
    validate_not_option,
    validate_path,
    validate_positive,
    validate_required,
    validate_safe_string,
)


@pytest.mark.parametrize("ch", FORBIDDEN_CHARS)
def test_each_forbidden_character_rejected(ch):
    with pytest.raises(InvalidArgument) as exc:
        validate_safe_string(f"main{ch}rm -rf", "branch")
    assert "'branch'" in str(exc.value)


def test_command_substitution_rejected():
    with pytest.raises(InvalidArgument):
        validate_safe_string("$(whoami)", "owner")


@pytest.mark.parametrize("value", [
    "my-org",
    "repo.with-dots_and-dashes",
    "feature/user/new-feature",
    "docs/My Document.md",
    "Bug: \"Quotes\" in 'names'",
    "émojis 🎉",
    "",
])
def test_ordinary_values_pass(value):
    validate_safe_string(value, "field")


def test_none_passes_safe_string():
    validate_safe_string(None, "field")


@pytest.mark.parametrize("value", [None, "", "   ", "\t"])
def test_required_rejects_missing(value):
    with pytest.raises(MissingArgument):
        validate_required(value, "owner")


def test_required_still_applies_deny_list():
    with pytest.raises(InvalidArgument):
        validate_required("octo;cat", "owner")


def test_name_accepts_ordinary_owner_and_repo():
    validate_name("octocat", "owner")
    validate_name("Hello-World.js", "repo")
    validate_name(None, "owner")


@pytest.mark.parametrize("value", ["a/b", "..", ".", "-x", "--visibility=private", "r?x=1", "r#frag"])
def test_name_rejects_anything_beyond_one_segment(value):
    with pytest.raises(InvalidArgument):
        validate_name(value, "repo")


@pytest.mark.parametrize("value", ["README", "docs/My Document.md", "feature/user/x", "v1.2..3", None, "", "  "])
def test_path_accepts_nested_values(value):
    validate_path(value, "path")


@pytest.mark.parametrize("value", [
    "../../../..",
    "docs/../../user",
    "./README",
    "/etc/passwd",
    "docs/",
    "a//b",
    "README?ref=evil",
    "README#x",
    "%2e%2e/user",
])
def test_path_rejects_endpoint_changes(value):
    with pytest.raises(InvalidArgument) as exc:
        validate_path(value, "path")
    assert "'path'" in str(exc.value)


def test_not_option():
    validate_not_option("bug -label:wontfix", "query")
    validate_not_option(None, "query")
    with pytest.raises(InvalidArgument):
        validate_not_option("--web", "query")


@pytest.mark.parametrize("value", [0, -1, -100])
def test_positive_rejects_zero_and_negative(value):
    with pytest.raises(InvalidArgument) as exc:
        validate_positive(value, "issue_number")
    assert str(value) in str(exc.value)


def test_positive_accepts_positive_and_rejects_none():
    validate_positive(1, "issue_number")
    validate_positive(2**31 - 1, "issue_number")
    with pytest.raises(MissingArgument):
        validate_positive(None, "issue_number")


def test_errors_are_value_errors():
    assert issubclass(InvalidArgument, ValueError)
    assert issubclass(MissingArgument, ValueError)
