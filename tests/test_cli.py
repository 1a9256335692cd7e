"""Tests for CLI module."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

import charsheet_terminal.cli as cli_module
import charsheet_terminal.config as cfg_module
import charsheet_terminal.session.app as app_module
from charsheet_terminal.cli import app

from conftest import CHARACTER_DATA

runner = CliRunner()


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg_module, "CONFIG_FILE", tmp_path / "config.toml")
    monkeypatch.setattr(cfg_module, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(cli_module, "CONFIG_FILE", tmp_path / "config.toml")
    monkeypatch.delenv("CHARSHEET_CHARACTER_FILE", raising=False)
    return tmp_path


class TestCli:
    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "charsheet-terminal v" in result.output

    def test_missing_character_file(self, config_home):
        result = runner.invoke(app, ["--open", str(config_home / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.output.lower()

    def test_invalid_character_file(self, config_home):
        path = config_home / "broken.json"
        path.write_text("{oops")
        result = runner.invoke(app, ["-o", str(path)])
        assert result.exit_code == 1
        assert "could not load" in result.output.lower()

    def test_starts_session(self, config_home, monkeypatch):
        path = config_home / "vex.json"
        path.write_text(json.dumps(CHARACTER_DATA))
        calls = []

        async def fake_run_session(config, character, fast_boot=False):
            calls.append((character.name, fast_boot))

        monkeypatch.setattr(cli_module, "setup_logging", lambda config: None)
        monkeypatch.setattr(app_module, "run_session", fake_run_session)

        result = runner.invoke(app, ["--fast-boot", "--open", str(path)])
        assert result.exit_code == 0
        assert calls == [("Vex", True)]

    def test_config_view(self, config_home):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "output.char_delay_ms" in result.output

    def test_config_set(self, config_home):
        result = runner.invoke(app, ["config", "output.char_delay_ms", "7"])
        assert result.exit_code == 0
        result = runner.invoke(app, ["config", "session.fast_boot", "true"])
        assert result.exit_code == 0

        loaded = cfg_module.load_config()
        assert loaded.output.char_delay_ms == 7
        assert loaded.session.fast_boot is True

    @pytest.mark.parametrize(
        "args",
        [
            ["config", "output.char_delay_ms"],
            ["config", "char_delay_ms", "7"],
            ["config", "display.width", "7"],
            ["config", "output.speed", "7"],
            ["config", "output.char_delay_ms", "fast"],
        ],
    )
    def test_config_errors(self, config_home, args):
        result = runner.invoke(app, args)
        assert result.exit_code == 1

    def test_logs_no_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(cli_module, "LOG_FILE", tmp_path / "nonexistent.log")

        result = runner.invoke(app, ["logs"])
        assert result.exit_code == 0
        assert "no log" in result.output.lower()

    def test_logs_tail(self, tmp_path, monkeypatch):
        log_file = tmp_path / "session.log"
        log_file.write_text("one\ntwo\nthree\n")
        monkeypatch.setattr(cli_module, "LOG_FILE", log_file)

        result = runner.invoke(app, ["logs", "-n", "2"])
        assert result.exit_code == 0
        assert "one" not in result.output
        assert "two" in result.output
        assert "three" in result.output
