"""Branch operations through the REST API (`gh api`)."""

from typing import List

from ..builder import api_path, or_default
from ..config import Settings
from ..schema import BranchCreateParams, BranchDeleteParams, Invoke, Operation, RepoParams


def build_list(p: RepoParams, settings: Settings) -> List[str]:
    return ["api", api_path(p.owner, p.repo, "branches")]


def build_lookup_sha(p: BranchCreateParams, settings: Settings) -> List[str]:
    """First step of create_branch: resolve the source branch head."""
    source = or_default(p.from_branch, settings.default_branch)
    return ["api", api_path(p.owner, p.repo, "git", "ref", "heads", source), "--jq", ".object.sha"]


def build_create_ref(p: BranchCreateParams, sha: str) -> List[str]:
    return [
        "api", api_path(p.owner, p.repo, "git", "refs"),
        "--method", "POST",
        "--field", f"ref=refs/heads/{p.branch_name}",
        "--field", f"sha={sha}",
    ]


def run_create(p: BranchCreateParams, settings: Settings, invoke: Invoke) -> str:
    """Look up the source branch SHA, then create the new ref pointing at it.

    A failed lookup is returned as-is and the second call is never made.
    """
    lookup = invoke(build_lookup_sha(p, settings))
    if not lookup.success:
        return lookup.result()
    sha = lookup.stdout.strip()
    if not sha:
        source = or_default(p.from_branch, settings.default_branch)
        return f"Error: Could not resolve SHA of branch '{source}'"
    return invoke(build_create_ref(p, sha)).result()


def build_delete(p: BranchDeleteParams, settings: Settings) -> List[str]:
    return ["api", api_path(p.owner, p.repo, "git", "refs", "heads", p.branch_name), "--method", "DELETE"]


OPERATIONS = [
    Operation("list_branches", "List branches in a GitHub repository", RepoParams, build_list),
    Operation(
        "create_branch",
        "Create a new branch from an existing one (the default branch if none is given)",
        BranchCreateParams,
        build_lookup_sha,
        run=run_create,
    ),
    Operation("delete_branch", "Delete a branch", BranchDeleteParams, build_delete),
]
