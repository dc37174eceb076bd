"""Pull request operations: list, view, diff, create, merge."""

from typing import List

from ..builder import add_option, add_switch, choose, or_default, repo_spec
from ..config import Settings
from ..schema import Operation, PullCreateParams, PullListParams, PullMergeParams, PullNumberParams

LIST_FIELDS = "number,title,state,createdAt,author,headRefName,baseRefName,url"
VIEW_FIELDS = "number,title,state,createdAt,author,body,headRefName,baseRefName,mergeable,url"

MERGE_METHODS = ("merge", "squash", "rebase")
DEFAULT_MERGE_METHOD = "merge"


def build_list(p: PullListParams, settings: Settings) -> List[str]:
    return [
        "pr", "list",
        "--repo", repo_spec(p.owner, p.repo),
        "--state", or_default(p.state, "open"),
        "--json", LIST_FIELDS,
    ]


def build_view(p: PullNumberParams, settings: Settings) -> List[str]:
    return ["pr", "view", str(p.pr_number), "--repo", repo_spec(p.owner, p.repo), "--json", VIEW_FIELDS]


def build_diff(p: PullNumberParams, settings: Settings) -> List[str]:
    return ["pr", "diff", str(p.pr_number), "--repo", repo_spec(p.owner, p.repo)]


def build_create(p: PullCreateParams, settings: Settings) -> List[str]:
    args = [
        "pr", "create",
        "--repo", repo_spec(p.owner, p.repo),
        "--title", p.title,
        "--head", p.head,
        "--base", or_default(p.base, settings.default_branch),
    ]
    add_option(args, "--body", p.body)
    add_switch(args, "--draft", p.draft)
    return args


def build_merge(p: PullMergeParams, settings: Settings) -> List[str]:
    args = ["pr", "merge", str(p.pr_number), "--repo", repo_spec(p.owner, p.repo)]
    add_switch(args, "--delete-branch", p.delete_branch)
    args.append("--" + choose(p.method, MERGE_METHODS, DEFAULT_MERGE_METHOD))
    return args


OPERATIONS = [
    Operation("list_pull_requests", "List pull requests in a GitHub repository", PullListParams, build_list),
    Operation("get_pull_request", "Get details of a specific pull request", PullNumberParams, build_view),
    Operation("get_pull_request_diff", "Get the diff of a pull request", PullNumberParams, build_diff),
    Operation("create_pull_request", "Create a new pull request", PullCreateParams, build_create),
    Operation(
        "merge_pull_request",
        "Merge a pull request using the merge, squash or rebase strategy",
        PullMergeParams,
        build_merge,
    ),
]
