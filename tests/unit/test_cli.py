"""Unit tests for the command-line interface."""

import json
import logging
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from voxsettings.main import EXIT_FAILURE, cli, exit_code_for, parse_assignments
from voxsettings.models.status import SaveOutcome


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging replaces root handlers; put them back after each test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def app_dir(temp_data_dir):
    return Path(temp_data_dir) / "app"


@pytest.fixture
def config_path(temp_data_dir, app_dir):
    path = Path(temp_data_dir) / "voxsettings.yaml"
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump({
            "storage": {"app_dir": str(app_dir)},
            "logging": {"console_output": False},
        }, f)
    return str(path)


def run(config_path, *args, **kwargs):
    return CliRunner().invoke(cli, ["--config", config_path, *args], obj=None, **kwargs)


@pytest.mark.unit
class TestCli:
    """End-to-end command tests against a temporary app directory."""

    def test_show_first_run(self, config_path, app_dir):
        result = run(config_path, "--onboarding", "show")

        assert result.exit_code == 0, result.output
        assert "Getting started" in result.output
        assert "No API key stored" in result.output
        assert (app_dir / "config.json").exists()

    def test_set_persists_values(self, config_path, app_dir):
        result = run(config_path, "set", "language=en", "retry_count=5")

        assert result.exit_code == 0, result.output
        data = json.loads((app_dir / "config.json").read_text(encoding="utf-8"))
        assert data["language"] == "en"
        assert data["retry_count"] == 5
        assert "Settings saved" in result.output

    def test_set_out_of_range_fails(self, config_path, app_dir):
        result = run(config_path, "set", "max_recording_duration_sec=500")

        assert result.exit_code == EXIT_FAILURE
        assert "Failed to save settings" in result.output

    def test_set_unknown_field_fails(self, config_path):
        result = run(config_path, "set", "volume=11")

        assert result.exit_code == EXIT_FAILURE
        assert "volume" in result.output

    def test_set_requires_assignment_syntax(self, config_path):
        result = run(config_path, "set", "language")

        assert result.exit_code != 0
        assert "FIELD=VALUE" in result.output

    def test_reset(self, config_path, app_dir):
        run(config_path, "set", "language=ru")

        result = run(config_path, "reset", "--yes")

        assert result.exit_code == 0, result.output
        data = json.loads((app_dir / "config.json").read_text(encoding="utf-8"))
        assert data["language"] == "auto"

    def test_api_key_set_and_delete(self, config_path, app_dir):
        result = run(config_path, "api-key", "set", input="sk-secret\n")

        assert result.exit_code == 0, result.output
        assert (app_dir / "api_key").read_text(encoding="utf-8") == "sk-secret"
        assert "API key saved" in result.output

        result = run(config_path, "api-key", "delete", "--yes")

        assert result.exit_code == 0, result.output
        assert not (app_dir / "api_key").exists()

    def test_show_recovers_from_undecodable_config(self, config_path, app_dir):
        app_dir.mkdir(parents=True)
        (app_dir / "config.json").write_bytes(b"\xff\xfe\x00garbage")

        result = run(config_path, "show")

        assert result.exit_code == 0, result.output
        assert "Dictation settings" in result.output
        assert (app_dir / "config.json.bak").read_bytes() == b"\xff\xfe\x00garbage"

    def test_missing_config_file(self, temp_data_dir):
        result = run(str(Path(temp_data_dir) / "nope.yaml"), "show")

        assert result.exit_code != 0
        assert "not found" in result.output


@pytest.mark.unit
class TestCliHelpers:
    """Test cases for argument and exit-code helpers."""

    def test_parse_assignments(self):
        assert parse_assignments(["a=1", " b =x=y"]) == (("a", "1"), ("b", "x=y"))

    def test_exit_codes(self):
        assert exit_code_for(SaveOutcome.success("ok")) == 0
        assert exit_code_for(SaveOutcome.partial("half", "boom")) == 2
        assert exit_code_for(SaveOutcome.failure("no")) == EXIT_FAILURE
        assert exit_code_for(None) == EXIT_FAILURE
