from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

import run_dashboard


def test_find_app_points_at_package_script() -> None:
    app_path = run_dashboard.find_app()
    assert app_path.name == "app.py"
    assert app_path.parent.name == "glucose_dashboard"
    assert app_path.exists()


def test_main_forwards_extra_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: Dict[str, Any] = {}

    def _run(command: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls["command"] = command
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr(subprocess, "run", _run)

    assert run_dashboard.main(["--server.port", "8502"]) == 0
    command = calls["command"]
    assert command[:4] == [sys.executable, "-m", "streamlit", "run"]
    assert Path(command[4]) == run_dashboard.find_app()
    assert command[-2:] == ["--server.port", "8502"]


def test_main_returns_streamlit_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", lambda command, **kwargs: subprocess.CompletedProcess(command, 2))
    assert run_dashboard.main([]) == 2


def test_missing_app_returns_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(run_dashboard, "find_app", lambda: tmp_path / "app.py")
    assert run_dashboard.main([]) == 1
