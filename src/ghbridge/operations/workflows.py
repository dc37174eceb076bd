"""GitHub Actions operations: workflows and their runs."""

from typing import List

from ..builder import add_option, clamp_limit, or_default, repo_spec
from ..config import Settings
from ..schema import Operation, RepoParams, WorkflowRunListParams, WorkflowRunParams, WorkflowTriggerParams

WORKFLOW_FIELDS = "id,name,path,state"
RUN_LIST_FIELDS = "databaseId,displayTitle,status,conclusion,workflowName,headBranch,event,createdAt,url"
RUN_VIEW_FIELDS = (
    "databaseId,displayTitle,status,conclusion,workflowName,headBranch,headSha,event,createdAt,updatedAt,url,jobs"
)


def build_list_workflows(p: RepoParams, settings: Settings) -> List[str]:
    return ["workflow", "list", "--repo", repo_spec(p.owner, p.repo), "--json", WORKFLOW_FIELDS]


def build_list_runs(p: WorkflowRunListParams, settings: Settings) -> List[str]:
    args = ["run", "list", "--repo", repo_spec(p.owner, p.repo)]
    add_option(args, "--workflow", p.workflow)
    add_option(args, "--branch", p.branch)
    add_option(args, "--status", p.status)
    args += ["--limit", str(clamp_limit(p.limit, settings.list_limit))]
    args += ["--json", RUN_LIST_FIELDS]
    return args


def build_view_run(p: WorkflowRunParams, settings: Settings) -> List[str]:
    return ["run", "view", str(p.run_id), "--repo", repo_spec(p.owner, p.repo), "--json", RUN_VIEW_FIELDS]


def build_trigger(p: WorkflowTriggerParams, settings: Settings) -> List[str]:
    args = [
        "workflow", "run", p.workflow,
        "--repo", repo_spec(p.owner, p.repo),
        "--ref", or_default(p.ref, settings.default_branch),
    ]
    for key in sorted(p.inputs):
        args += ["--raw-field", f"{key}={p.inputs[key]}"]
    return args


OPERATIONS = [
    Operation("list_workflows", "List GitHub Actions workflows in a repository", RepoParams, build_list_workflows),
    Operation("list_workflow_runs", "List recent workflow runs", WorkflowRunListParams, build_list_runs),
    Operation("get_workflow_run", "Get details of a workflow run, including jobs", WorkflowRunParams, build_view_run),
    Operation(
        "trigger_workflow",
        "Trigger a workflow_dispatch run on a branch or tag",
        WorkflowTriggerParams,
        build_trigger,
    ),
]
