"""
Operation catalog.

Every operation is a descriptor from one of the area modules below. The
catalog validates parameters, builds the gh arguments and runs them through
an executor. Callers always get a string back: gh's output, or an
"Error: ..." message.
"""

import os
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import Settings
from ..executor import Executor, RunResult, make_executor
from ..schema import Operation, OperationParams

from .issues import OPERATIONS as ISSUE_OPERATIONS
from .pulls import OPERATIONS as PULL_OPERATIONS
from .releases import OPERATIONS as RELEASE_OPERATIONS
from .workflows import OPERATIONS as WORKFLOW_OPERATIONS
from .branches import OPERATIONS as BRANCH_OPERATIONS
from .repos import OPERATIONS as REPO_OPERATIONS

_DEBUG = bool(os.environ.get("GHBRIDGE_DEBUG", ""))


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[ghbridge] catalog: {msg}", file=sys.stderr)


class UnknownOperation(LookupError):
    """No operation is registered under the requested name."""


REGISTRY: Dict[str, Operation] = {
    op.name: op
    for group in (
        ISSUE_OPERATIONS,
        PULL_OPERATIONS,
        RELEASE_OPERATIONS,
        WORKFLOW_OPERATIONS,
        BRANCH_OPERATIONS,
        REPO_OPERATIONS,
    )
    for op in group
}


def get_operation(name: str) -> Operation:
    try:
        return REGISTRY[name]
    except KeyError:
        raise UnknownOperation(f"Unknown operation: {name}") from None


def list_operations() -> List[Operation]:
    return sorted(REGISTRY.values(), key=lambda op: op.name)


def describe_error(exc: Exception) -> str:
    """One-line message for a precondition failure."""
    if isinstance(exc, ValidationError):
        problems = []
        for e in exc.errors():
            loc = ".".join(str(part) for part in e["loc"]) or "parameters"
            problems.append(f"{loc}: {e['msg']}")
        return "Invalid parameters - " + "; ".join(problems)
    return str(exc.args[0]) if exc.args else exc.__class__.__name__


class Catalog:
    """Named operations bound to one Settings value and one executor."""

    def __init__(self, settings: Optional[Settings] = None, executor: Optional[Executor] = None):
        self.settings = settings or Settings()
        self.executor = executor or make_executor(timeout=self.settings.timeout)

    def _params(self, op: Operation, kwargs: Dict[str, Any]) -> OperationParams:
        params = op.params(**kwargs)
        params.check()
        return params

    def invoke(self, args: List[str]) -> RunResult:
        """Run gh with args (without the program name)."""
        return self.executor([self.settings.gh_binary, *args])

    def build(self, name: str, **kwargs: Any) -> List[str]:
        """Arguments of the operation's first invocation. Raises on bad parameters."""
        op = get_operation(name)
        return op.build(self._params(op, kwargs), self.settings)

    def call(self, name: str, **kwargs: Any) -> str:
        """Run an operation. Never raises for bad input or a failing gh; returns "Error: ..." instead."""
        try:
            op = get_operation(name)
            params = self._params(op, kwargs)
        except (UnknownOperation, ValueError) as exc:
            # pydantic's ValidationError is a ValueError, as are InvalidArgument/MissingArgument
            _debug(f"{name}: rejected: {exc}")
            return f"Error: {describe_error(exc)}"
        if op.run is not None:
            return op.run(params, self.settings, self.invoke)
        return self.invoke(op.build(params, self.settings)).result()
