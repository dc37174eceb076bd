"""Repository metadata, search, history, file contents and the authenticated user."""

from typing import List

from ..builder import add_positional, api_path, clamp_limit, is_blank, repo_spec
from ..config import Settings
from ..schema import (
    CommitHistoryParams,
    FileContentsParams,
    NoParams,
    Operation,
    RepoListParams,
    RepoParams,
    RepoSearchParams,
)
from .issues import SEARCH_FLOOR

REPO_VIEW_FIELDS = "name,owner,description,url,defaultBranchRef,stargazerCount,forkCount,isPrivate,updatedAt"
REPO_LIST_FIELDS = "name,owner,description,isPrivate,url,updatedAt"
REPO_SEARCH_FIELDS = "name,owner,description,url,stargazersCount"

COMMIT_PROJECTION = (
    "[.[] | {sha: .sha, message: .commit.message, author: .commit.author.name, "
    "date: .commit.author.date, url: .html_url}]"
)
# Decoding is done by gh's jq, not here.
DECODE_CONTENT = ".content | @base64d"


def build_view(p: RepoParams, settings: Settings) -> List[str]:
    return ["repo", "view", repo_spec(p.owner, p.repo), "--json", REPO_VIEW_FIELDS]


def build_list(p: RepoListParams, settings: Settings) -> List[str]:
    args = ["repo", "list"]
    add_positional(args, p.owner)
    args += ["--json", REPO_LIST_FIELDS]
    return args


def build_search(p: RepoSearchParams, settings: Settings) -> List[str]:
    return [
        "search", "repos", p.query,
        "--json", REPO_SEARCH_FIELDS,
        "--limit", str(clamp_limit(p.limit, settings.search_limit, SEARCH_FLOOR)),
    ]


def build_commits(p: CommitHistoryParams, settings: Settings) -> List[str]:
    endpoint = api_path(p.owner, p.repo, "commits") + f"?per_page={clamp_limit(p.limit, settings.commit_limit)}"
    if not is_blank(p.branch):
        endpoint += f"&sha={p.branch}"
    return ["api", endpoint, "--jq", COMMIT_PROJECTION]


def build_file_contents(p: FileContentsParams, settings: Settings) -> List[str]:
    endpoint = api_path(p.owner, p.repo, "contents", p.path)
    if not is_blank(p.branch):
        endpoint += f"?ref={p.branch}"
    return ["api", endpoint, "--jq", DECODE_CONTENT]


def build_me(p: NoParams, settings: Settings) -> List[str]:
    return ["api", "user"]


OPERATIONS = [
    Operation("get_repository", "Get metadata of a GitHub repository", RepoParams, build_view),
    Operation("list_repositories", "List repositories of a user or organization", RepoListParams, build_list),
    Operation("search_repositories", "Search for repositories on GitHub", RepoSearchParams, build_search),
    Operation("get_commit_history", "Get recent commits of a repository branch", CommitHistoryParams, build_commits),
    Operation(
        "get_file_contents",
        "Get the contents of a file from a GitHub repository",
        FileContentsParams,
        build_file_contents,
    ),
    Operation("get_me", "Get details of the authenticated GitHub user", NoParams, build_me),
]
