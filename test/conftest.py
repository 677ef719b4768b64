import os
import subprocess
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest
from flake_ci.utils.settings import Settings

RESULTS_JSON = '{"systems": ["x86_64-linux"], "result": {"ROOT": {"build": {"outPaths": []}}}}'
ARCHIVE_BYTES = b"fake docker archive\x00\x01\x02"
LOADED_IMAGE = "sha256:4f1e2d3c"


@dataclass
class RecordedCall:
    cmd: list[str]
    kwargs: dict[str, Any]
    stdin_bytes: bytes | None = None


@dataclass
class FakeProcesses:
    """Stands in for subprocess.run and mimics the tools the pipeline drives."""
    calls: list[RecordedCall] = field(default_factory=list)
    failing: list[Callable[[list[str]], bool]] = field(default_factory=list)

    def fail_when(self, predicate: Callable[[list[str]], bool]) -> None:
        self.failing.append(predicate)

    def commands(self) -> list[list[str]]:
        return [c.cmd for c in self.calls]

    def __call__(self, cmd, **kwargs):
        stdin = kwargs.get("stdin")
        call = RecordedCall(cmd=list(cmd), kwargs=kwargs, stdin_bytes=stdin.read() if stdin else None)
        self.calls.append(call)
        if any(predicate(cmd) for predicate in self.failing):
            return subprocess.CompletedProcess(cmd, 1, stdout=None, stderr=None)

        cwd = kwargs.get("cwd") or os.getcwd()
        stdout: str | bytes | None = None
        if cmd[:3] == ["om", "ci", "run"]:
            results = next(a for a in cmd if a.startswith("--results=")).split("=", 1)[1]
            with open(os.path.join(cwd, results), "w") as f:
                f.write(RESULTS_JSON)
        elif cmd[:2] == ["nix", "run"] and cmd[2].endswith(".copyTo"):
            tarball = cmd[3].removeprefix("docker-archive:")
            with open(os.path.join(cwd, tarball), "wb") as f:
                f.write(ARCHIVE_BYTES)
        elif cmd[:2] == ["docker", "load"]:
            stdout = f"Loaded image ID: {LOADED_IMAGE}\n".encode()
        elif cmd[:3] == ["aws", "ecr", "get-login-password"]:
            stdout = "ecr-password\n"

        if kwargs.get("capture_output") and stdout is None:
            stdout = b"" if stdin else ""
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr=None)


@pytest.fixture
def fake_processes(monkeypatch):
    fake = FakeProcesses()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def settings(tmp_path):
    return Settings(
        config_file=str(tmp_path / "flake-ci.yaml"),
        stash_dir=str(tmp_path / "stash"),
        stash_ttl_hours=24,
        agent_workspace_root=str(tmp_path / "agents"),
    )
