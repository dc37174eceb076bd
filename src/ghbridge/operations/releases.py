"""Release operations."""

from typing import List

from ..builder import add_option, add_positional, add_switch, clamp_limit, repo_spec
from ..config import Settings
from ..schema import Operation, ReleaseCreateParams, ReleaseListParams, ReleaseViewParams

LIST_FIELDS = "tagName,name,isLatest,isDraft,isPrerelease,publishedAt"
VIEW_FIELDS = "tagName,name,body,isDraft,isPrerelease,publishedAt,url,assets"


def build_list(p: ReleaseListParams, settings: Settings) -> List[str]:
    return [
        "release", "list",
        "--repo", repo_spec(p.owner, p.repo),
        "--limit", str(clamp_limit(p.limit, settings.list_limit)),
        "--json", LIST_FIELDS,
    ]


def build_view(p: ReleaseViewParams, settings: Settings) -> List[str]:
    args = ["release", "view"]
    add_positional(args, p.tag)
    args += ["--repo", repo_spec(p.owner, p.repo), "--json", VIEW_FIELDS]
    return args


def build_create(p: ReleaseCreateParams, settings: Settings) -> List[str]:
    args = ["release", "create", p.tag, "--repo", repo_spec(p.owner, p.repo)]
    add_option(args, "--title", p.title)
    add_option(args, "--notes", p.notes)
    add_option(args, "--target", p.target)
    add_switch(args, "--draft", p.draft)
    add_switch(args, "--prerelease", p.prerelease)
    add_switch(args, "--generate-notes", p.generate_notes)
    return args


OPERATIONS = [
    Operation("list_releases", "List releases in a GitHub repository", ReleaseListParams, build_list),
    Operation("get_release", "Get a release by tag, or the latest release", ReleaseViewParams, build_view),
    Operation("create_release", "Create a release for a tag", ReleaseCreateParams, build_create),
]
