"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from pkgsender.cli import main, parse_args
from pkgsender.config.settings import REQUIRED_ENV_VARS


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, pkg_root: Path) -> pytest.MonkeyPatch:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("STATIC_FILES", str(pkg_root))
    monkeypatch.setenv("PS4IP", "192.168.1.50")
    monkeypatch.setenv("LOCALIP", "192.168.1.10")
    return monkeypatch


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.command is None
        assert args.config is None
        assert args.verbose is False

    def test_scan_with_config(self) -> None:
        args = parse_args(["-c", "my.yaml", "-v", "scan"])
        assert args.command == "scan"
        assert args.config == Path("my.yaml")
        assert args.verbose is True


class TestMain:
    def test_missing_config_exits_before_listening(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        for name in REQUIRED_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        with patch("uvicorn.run") as run:
            with pytest.raises(SystemExit) as exc_info:
                main(["serve"])
        assert exc_info.value.code == 1
        run.assert_not_called()
        err = capsys.readouterr().err
        for name in REQUIRED_ENV_VARS:
            assert name in err

    def test_serve_runs_uvicorn(self, env: pytest.MonkeyPatch) -> None:
        with patch("uvicorn.run") as run:
            main([])
        run.assert_called_once()
        assert run.call_args.kwargs == {"host": "0.0.0.0", "port": 8080, "log_config": None}

    def test_scan_prints_listing(self, env: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        main(["scan"])
        out = capsys.readouterr().out
        assert "a.pkg" in out
        assert "2 KB" in out
        assert "2 package(s)" in out
