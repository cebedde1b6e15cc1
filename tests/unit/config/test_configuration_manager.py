"""Tests for ConfigurationManager and directory discovery."""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from mason_gcp.config.manager import ConfigurationManager
from mason_gcp.config.platform_dirs import (
    get_config_location,
    get_logs_location,
    in_virtualenv,
)
from mason_gcp.domain.base.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in ("MASON_CONFIG_DIR", "MASON_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("MASON_GCP__OPERATION_TIMEOUT", raising=False)
    monkeypatch.delenv("MASON_LOGGING__LEVEL", raising=False)


@pytest.mark.unit
class TestConfigurationManager:
    """Loading settings files and environment overrides."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MASON_CONFIG_DIR", str(tmp_path))
        manager = ConfigurationManager()

        config = manager.load()

        assert manager.config_file is None
        assert config.gcp.operation_timeout == 900
        assert config.gcp.poll_interval == 5.0
        assert config.gcp.service_account is None
        assert config.logging.level == "INFO"

    def test_json_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps({"gcp": {"operation_timeout": 120, "max_workers": 4}, "logging": {"level": "debug"}})
        )

        config = ConfigurationManager(config_file).load()

        assert config.gcp.operation_timeout == 120
        assert config.gcp.max_workers == 4
        assert config.logging.level == "DEBUG"

    def test_yaml_file_discovered_in_config_dir(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("gcp:\n  poll_interval: 1.5\n")
        monkeypatch.setenv("MASON_CONFIG_DIR", str(tmp_path))

        manager = ConfigurationManager()

        assert manager.config_file == tmp_path / "config.yaml"
        assert manager.get_app_config().gcp.poll_interval == 1.5

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"gcp": {"operation_timeout": 120}}))
        monkeypatch.setenv("MASON_GCP__OPERATION_TIMEOUT", "60")

        config = ConfigurationManager(config_file).load()

        assert config.gcp.operation_timeout == 60

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(tmp_path / "absent.json").load()
        assert exc_info.value.error_code == "CONFIG_FILE_NOT_FOUND"

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"gcp": {"operation_timeout": -1}}))

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(config_file).load()

        assert exc_info.value.error_code == "INVALID_CONFIGURATION"
        fields = [e["field"] for e in exc_info.value.details["errors"]]
        assert "gcp -> operation_timeout" in fields

    def test_app_config_is_cached(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")
        manager = ConfigurationManager(config_file)

        assert manager.get_app_config() is manager.get_app_config()


@pytest.mark.unit
class TestPlatformDirs:
    """Directory discovery."""

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MASON_CONFIG_DIR", str(tmp_path / "c"))
        monkeypatch.setenv("MASON_LOG_DIR", str(tmp_path / "l"))

        assert get_config_location() == tmp_path / "c"
        assert get_logs_location() == tmp_path / "l"

    def test_development_checkout(self, tmp_path, monkeypatch):
        (tmp_path / "pyproject.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert get_config_location() == tmp_path / "config"
        assert get_logs_location() == tmp_path / "logs"

    def test_in_virtualenv(self):
        with (
            patch.object(sys, "prefix", "/path/to/venv"),
            patch.object(sys, "base_prefix", "/usr/local"),
        ):
            assert in_virtualenv() is True

    def test_fallback_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with (
            patch("mason_gcp.config.platform_dirs.Path.exists", return_value=False),
            patch("mason_gcp.config.platform_dirs.in_virtualenv", return_value=False),
        ):
            assert get_config_location() == Path.cwd() / "config"
