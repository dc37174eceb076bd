from typing import List, Optional

import pytest

from ghbridge.config import Settings
from ghbridge.executor import RunResult
from ghbridge.operations import Catalog


class RecordingExecutor:
    """Executor that records every command and replays queued results (default: empty success)."""

    def __init__(self):
        self.commands: List[List[str]] = []
        self._queued: List[RunResult] = []

    def queue(self, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self._queued.append(RunResult(stdout=stdout, stderr=stderr, returncode=returncode))

    def __call__(self, cmd: List[str], *, cwd: Optional[str] = None) -> RunResult:
        self.commands.append(list(cmd))
        if self._queued:
            return self._queued.pop(0)
        return RunResult(stdout="", stderr="", returncode=0)

    @property
    def last(self) -> List[str]:
        return self.commands[-1] if self.commands else []


@pytest.fixture
def recorder() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def catalog(recorder) -> Catalog:
    return Catalog(Settings(default_branch="main"), executor=recorder)
