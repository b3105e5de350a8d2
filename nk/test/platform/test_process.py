from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from nk.core.result import Err, Ok
from nk.platform.process import ProcessError, run


def test_run_returns_stdout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        assert kwargs["cwd"] == str(tmp_path)
        return subprocess.CompletedProcess(cmd, 0, stdout="out\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert run(["git", "status"], cwd=tmp_path) == Ok("out\n")


def test_run_nonzero_exit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(cmd, 128, stdout="", stderr="fatal: bad\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = run(["git", "log"], cwd=tmp_path)
    assert isinstance(result, Err)
    assert result.error.returncode == 128
    assert result.error.stderr == "fatal: bad\n"


def test_run_timeout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise subprocess.TimeoutExpired(cmd, 5)

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = run(["git", "push"], cwd=tmp_path, timeout=5)
    assert isinstance(result, Err)
    assert result.error.returncode == -1
    assert "timed out" in result.error.stderr


def test_run_missing_binary(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError("git")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = run(["git", "log"], cwd=tmp_path)
    assert isinstance(result, Err)
    assert result.error.returncode == -1


def test_process_error_str_truncates_command() -> None:
    err = ProcessError(command=("git", "log", "--format=x", "HEAD"), returncode=1, stdout="", stderr="")
    assert str(err) == "git log --format=x ... failed (exit 1)"
