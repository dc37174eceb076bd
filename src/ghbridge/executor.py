"""
Command execution abstraction.

Operations never call subprocess directly. They use the provided executor
so that tests can inject recorded results instead of running the real gh binary.

Every failure of the child process (could not launch, timed out, exited
non-zero) comes back as a RunResult value. The only thing that propagates is
KeyboardInterrupt, after the child has been killed.
"""

import os
import signal
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import IO, List, Optional, Protocol

DEFAULT_TIMEOUT = 30

# Readers should be at EOF once the child exits; this only covers grandchildren
# that inherited the pipes and are still holding them open.
_JOIN_GRACE = 1.0

_POSIX = os.name == "posix"

_DEBUG = bool(os.environ.get("GHBRIDGE_DEBUG", ""))


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[ghbridge] executor: {msg}", file=sys.stderr)


@dataclass(frozen=True)
class RunResult:
    """Result of running a command (or a recorded stand-in for one)."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def result(self) -> str:
        """Return stdout on success, otherwise an "Error: ..." message built from stderr."""
        if self.success:
            return self.stdout
        return f"Error: {self.stderr}"


class Executor(Protocol):
    """Protocol for command execution. Implementations may run commands or replay recordings."""

    def __call__(self, cmd: List[str], *, cwd: Optional[str] = None) -> RunResult:
        """Execute cmd (cmd[0] is the program). Returns stdout, stderr, returncode."""
        ...


def _drain(stream: IO[str], sink: List[str]) -> None:
    with stream:
        for line in stream:
            sink.append(line.rstrip("\r\n") + "\n")


def _join(readers: List[threading.Thread]) -> None:
    for t in readers:
        t.join(_JOIN_GRACE)
        if t.is_alive():
            _debug(f"{t.name} still reading after {_JOIN_GRACE}s, abandoning")


def _kill_tree(proc: "subprocess.Popen[str]") -> None:
    """SIGKILL the child's process group (the child alone off POSIX) and reap it."""
    try:
        if _POSIX:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except OSError as exc:
        # Already exited between the wait and the kill.
        _debug(f"kill pid {proc.pid}: {exc}")
    proc.wait()


def subprocess_executor(
    cmd: List[str],
    *,
    cwd: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> RunResult:
    """Default implementation: run the command as a child process.

    The argument vector is handed to the OS as-is; no shell ever sees it.
    stdout and stderr are drained by one thread each so that a child filling
    one pipe cannot block while we wait on the other. The wait is bounded by
    timeout seconds from launch; on expiry the whole process group is killed.
    """
    if not cmd:
        return RunResult(stdout="", stderr="Failed to execute command - empty command", returncode=-1)
    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=cwd,
            start_new_session=_POSIX,
        )
    except (OSError, ValueError) as exc:
        _debug(f"launch failed for {cmd[0]}: {exc}")
        return RunResult(stdout="", stderr=f"Failed to execute command - {exc}", returncode=-1)

    _debug(f"pid {proc.pid}: {' '.join(cmd)}")
    out: List[str] = []
    err: List[str] = []
    readers = [
        threading.Thread(target=_drain, args=(proc.stdout, out), name=f"stdout-{proc.pid}", daemon=True),
        threading.Thread(target=_drain, args=(proc.stderr, err), name=f"stderr-{proc.pid}", daemon=True),
    ]
    for t in readers:
        t.start()

    try:
        returncode = proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        _debug(f"pid {proc.pid}: timed out after {timeout:g}s, killing")
        _kill_tree(proc)
        _join(readers)
        return RunResult(stdout="", stderr=f"Command timed out after {timeout:g} seconds", returncode=-1)
    except KeyboardInterrupt:
        _kill_tree(proc)
        _join(readers)
        interrupted = RunResult(stdout="", stderr="Command execution interrupted", returncode=-1)
        _debug(f"pid {proc.pid}: {interrupted.result()}")
        raise

    _join(readers)
    _debug(f"pid {proc.pid}: exited {returncode}")
    return RunResult(
        stdout="".join(out).rstrip(),
        stderr="".join(err).rstrip(),
        returncode=returncode,
    )


def make_executor(timeout: float = DEFAULT_TIMEOUT, work_dir: Optional[str] = None) -> Executor:
    """Create the default executor bound to a timeout and working directory."""
    def run(cmd: List[str], *, cwd: Optional[str] = None) -> RunResult:
        return subprocess_executor(cmd, cwd=cwd or work_dir, timeout=timeout)
    return run
