"""
Operation schema.

Each operation pairs a parameter model (what the caller may pass) with a
builder rule (how those parameters become gh arguments). Parameter models are
constructed per call and thrown away once the arguments are built.

Required parameters are typed Optional so that a missing value surfaces as
MissingArgument from check() rather than as a schema error.
"""

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel, Field

from .config import Settings
from .executor import RunResult
from .validation import (
    MissingArgument,
    validate_name,
    validate_not_option,
    validate_path,
    validate_positive,
    validate_required,
    validate_safe_string,
)


class OperationParams(BaseModel):
    """Base for all parameter models."""

    # Identifiers that must be present; also run through the deny-list.
    REQUIRED: ClassVar[Tuple[str, ...]] = ()
    # Free text that must be present (titles, bodies). Newlines and markdown allowed.
    REQUIRED_TEXT: ClassVar[Tuple[str, ...]] = ()
    # Optional identifiers run through the deny-list when given.
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ()
    # Integers that must be present and positive (issue numbers, run ids).
    POSITIVE: ClassVar[Tuple[str, ...]] = ()
    # Owner and repository names, placed in API paths and `owner/repo`.
    NAMES: ClassVar[Tuple[str, ...]] = ()
    # Values pasted into a REST endpoint; slashes allowed, dot segments not.
    PATHS: ClassVar[Tuple[str, ...]] = ()
    # Values passed to gh as positional arguments.
    POSITIONAL: ClassVar[Tuple[str, ...]] = ()

    model_config = {"extra": "forbid", "frozen": True}

    def check(self) -> None:
        """Raise InvalidArgument / MissingArgument before anything is built or spawned."""
        for name in self.REQUIRED:
            validate_required(getattr(self, name), name)
        for name in self.REQUIRED_TEXT:
            value = getattr(self, name)
            if value is None or not value.strip():
                raise MissingArgument(f"Parameter '{name}' cannot be null or empty")
        for name in self.IDENTIFIERS:
            validate_safe_string(getattr(self, name), name)
        for name in self.POSITIVE:
            validate_positive(getattr(self, name), name)
        for name in self.NAMES:
            validate_name(getattr(self, name), name)
        for name in self.PATHS:
            validate_path(getattr(self, name), name)
        for name in self.POSITIONAL:
            validate_not_option(getattr(self, name), name)


class NoParams(OperationParams):
    pass


class RepoParams(OperationParams):
    owner: Optional[str] = None
    repo: Optional[str] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo")
    NAMES: ClassVar[Tuple[str, ...]] = ("owner", "repo")


# --- Issues ---


class IssueListParams(RepoParams):
    state: Optional[str] = None
    label: Optional[str] = None
    assignee: Optional[str] = None

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("state", "label", "assignee")


class IssueNumberParams(RepoParams):
    issue_number: Optional[int] = None

    POSITIVE: ClassVar[Tuple[str, ...]] = ("issue_number",)


class IssueCreateParams(RepoParams):
    title: Optional[str] = None
    body: Optional[str] = None
    label: Optional[str] = None
    assignee: Optional[str] = None

    REQUIRED_TEXT: ClassVar[Tuple[str, ...]] = ("title",)
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("label", "assignee")


class IssueCloseParams(IssueNumberParams):
    comment: Optional[str] = None


class IssueCommentParams(IssueNumberParams):
    body: Optional[str] = None

    REQUIRED_TEXT: ClassVar[Tuple[str, ...]] = ("body",)


class IssueSearchParams(OperationParams):
    query: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    state: Optional[str] = None
    limit: Optional[int] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("query",)
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("owner", "repo", "state")
    NAMES: ClassVar[Tuple[str, ...]] = ("owner", "repo")
    POSITIONAL: ClassVar[Tuple[str, ...]] = ("query",)


# --- Pull requests ---


class PullListParams(RepoParams):
    state: Optional[str] = None

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("state",)


class PullNumberParams(RepoParams):
    pr_number: Optional[int] = None

    POSITIVE: ClassVar[Tuple[str, ...]] = ("pr_number",)


class PullCreateParams(RepoParams):
    title: Optional[str] = None
    head: Optional[str] = None
    base: Optional[str] = None
    body: Optional[str] = None
    draft: Optional[bool] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo", "head")
    REQUIRED_TEXT: ClassVar[Tuple[str, ...]] = ("title",)
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("base",)


class PullMergeParams(PullNumberParams):
    method: Optional[str] = None  # merge | squash | rebase, any case
    delete_branch: Optional[bool] = None

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("method",)


# --- Releases ---


class ReleaseListParams(RepoParams):
    limit: Optional[int] = None


class ReleaseViewParams(RepoParams):
    tag: Optional[str] = None  # None means the latest release

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("tag",)
    POSITIONAL: ClassVar[Tuple[str, ...]] = ("tag",)


class ReleaseCreateParams(RepoParams):
    tag: Optional[str] = None
    title: Optional[str] = None
    notes: Optional[str] = None
    target: Optional[str] = None
    draft: Optional[bool] = None
    prerelease: Optional[bool] = None
    generate_notes: Optional[bool] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo", "tag")
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("target",)
    POSITIONAL: ClassVar[Tuple[str, ...]] = ("tag",)


# --- Workflows ---


class WorkflowRunListParams(RepoParams):
    workflow: Optional[str] = None
    branch: Optional[str] = None
    status: Optional[str] = None
    limit: Optional[int] = None

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("workflow", "branch", "status")


class WorkflowRunParams(RepoParams):
    run_id: Optional[int] = None

    POSITIVE: ClassVar[Tuple[str, ...]] = ("run_id",)


class WorkflowTriggerParams(RepoParams):
    workflow: Optional[str] = None
    ref: Optional[str] = None
    inputs: Dict[str, str] = Field(default_factory=dict)

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo", "workflow")
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("ref",)
    POSITIONAL: ClassVar[Tuple[str, ...]] = ("workflow",)

    def check(self) -> None:
        super().check()
        for key, value in self.inputs.items():
            validate_required(key, "inputs")
            validate_safe_string(value, f"inputs.{key}")


# --- Branches and repository metadata ---


class BranchCreateParams(RepoParams):
    branch_name: Optional[str] = None
    from_branch: Optional[str] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo", "branch_name")
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("from_branch",)
    PATHS: ClassVar[Tuple[str, ...]] = ("branch_name", "from_branch")


class BranchDeleteParams(RepoParams):
    branch_name: Optional[str] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo", "branch_name")
    PATHS: ClassVar[Tuple[str, ...]] = ("branch_name",)


class RepoListParams(OperationParams):
    owner: Optional[str] = None  # None lists the authenticated user's repositories

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("owner",)
    NAMES: ClassVar[Tuple[str, ...]] = ("owner",)


class RepoSearchParams(OperationParams):
    query: Optional[str] = None
    limit: Optional[int] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("query",)
    POSITIONAL: ClassVar[Tuple[str, ...]] = ("query",)


class CommitHistoryParams(RepoParams):
    branch: Optional[str] = None
    limit: Optional[int] = None

    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("branch",)
    PATHS: ClassVar[Tuple[str, ...]] = ("branch",)


class FileContentsParams(RepoParams):
    path: Optional[str] = None
    branch: Optional[str] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("owner", "repo", "path")
    IDENTIFIERS: ClassVar[Tuple[str, ...]] = ("branch",)
    PATHS: ClassVar[Tuple[str, ...]] = ("path", "branch")


# --- Operation descriptor ---


def field_type(annotation: Any) -> Any:
    """Unwrap Optional[X] to X and Dict[K, V] to dict."""
    args = [a for a in get_args(annotation) if a is not type(None)]
    if get_origin(annotation) is Union and len(args) == 1:
        annotation = args[0]
    return get_origin(annotation) or annotation


# Runs one gh invocation (arguments without the program name).
Invoke = Callable[[List[str]], RunResult]


@dataclass(frozen=True)
class Operation:
    """A named operation: parameter model plus the rule that turns it into gh arguments.

    `build` produces the arguments of the first (usually only) invocation.
    Operations needing more than one invocation also set `run`, which drives
    the whole sequence and returns the final text.
    """

    name: str
    description: str
    params: Type[OperationParams]
    build: Callable[[Any, Settings], List[str]]
    run: Optional[Callable[[Any, Settings, Invoke], str]] = None
