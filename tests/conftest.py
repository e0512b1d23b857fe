from typing import Callable, Dict, List, Optional, Sequence

import pytest

from cmdloader.schema import RunResult


class FakeRunner:
    """ProcessRunner that records calls and returns scripted results without spawning anything."""

    def __init__(
        self,
        result: Optional[RunResult] = None,
        status: Optional[int] = 0,
        on_run: Optional[Callable[[str, List[str]], None]] = None,
        raises: Optional[BaseException] = None,
    ):
        self.result = result or RunResult(stdout="", stderr="", returncode=0)
        self.status = status
        self.on_run = on_run
        self.raises = raises
        self.calls: List[tuple] = []

    def _call(self, kind: str, cmd: str, args: Sequence[str], env: Optional[Dict[str, str]]):
        self.calls.append((kind, cmd, list(args), env))
        if self.raises is not None:
            raise self.raises
        if self.on_run is not None:
            self.on_run(cmd, list(args))

    def run_status(self, cmd, args, env=None):
        self._call("status", cmd, args, env)
        return self.status

    def run_output(self, cmd, args, env=None):
        self._call("output", cmd, args, env)
        return self.result


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
