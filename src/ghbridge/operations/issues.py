"""Issue operations: list, view, create, close, comment, search."""

from typing import List

from ..builder import add_option, clamp_limit, is_blank, or_default, repo_spec
from ..config import Settings
from ..schema import (
    IssueCloseParams,
    IssueCommentParams,
    IssueCreateParams,
    IssueListParams,
    IssueNumberParams,
    IssueSearchParams,
    Operation,
)

LIST_FIELDS = "number,title,state,createdAt,author,body,labels,assignees,url"
VIEW_FIELDS = "number,title,state,createdAt,author,body,labels,assignees,comments,url"
SEARCH_FIELDS = "number,title,state,repository,url"

# Positive limits under this are rounded up to it.
SEARCH_FLOOR = 10


def build_list(p: IssueListParams, settings: Settings) -> List[str]:
    args = ["issue", "list", "--repo", repo_spec(p.owner, p.repo), "--state", or_default(p.state, "open")]
    add_option(args, "--label", p.label)
    add_option(args, "--assignee", p.assignee)
    args += ["--json", LIST_FIELDS]
    return args


def build_view(p: IssueNumberParams, settings: Settings) -> List[str]:
    return ["issue", "view", str(p.issue_number), "--repo", repo_spec(p.owner, p.repo), "--json", VIEW_FIELDS]


def build_create(p: IssueCreateParams, settings: Settings) -> List[str]:
    args = ["issue", "create", "--repo", repo_spec(p.owner, p.repo), "--title", p.title]
    add_option(args, "--body", p.body)
    add_option(args, "--label", p.label)
    add_option(args, "--assignee", p.assignee)
    return args


def build_close(p: IssueCloseParams, settings: Settings) -> List[str]:
    args = ["issue", "close", str(p.issue_number), "--repo", repo_spec(p.owner, p.repo)]
    add_option(args, "--comment", p.comment)
    return args


def build_comment(p: IssueCommentParams, settings: Settings) -> List[str]:
    return ["issue", "comment", str(p.issue_number), "--repo", repo_spec(p.owner, p.repo), "--body", p.body]


def build_search(p: IssueSearchParams, settings: Settings) -> List[str]:
    args = ["search", "issues", p.query]
    # --repo needs both halves; one alone is ignored rather than half-passed.
    if not is_blank(p.owner) and not is_blank(p.repo):
        args += ["--repo", repo_spec(p.owner, p.repo)]
    add_option(args, "--state", p.state)
    args += ["--limit", str(clamp_limit(p.limit, settings.search_limit, SEARCH_FLOOR))]
    args += ["--json", SEARCH_FIELDS]
    return args


OPERATIONS = [
    Operation("list_issues", "List issues in a GitHub repository", IssueListParams, build_list),
    Operation("get_issue", "Get details of a specific issue in a GitHub repository", IssueNumberParams, build_view),
    Operation("create_issue", "Create a new issue in a GitHub repository", IssueCreateParams, build_create),
    Operation("close_issue", "Close an issue, optionally leaving a comment", IssueCloseParams, build_close),
    Operation("comment_on_issue", "Add a comment to an issue", IssueCommentParams, build_comment),
    Operation("search_issues", "Search issues and pull requests across GitHub", IssueSearchParams, build_search),
]
