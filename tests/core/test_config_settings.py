"""Tests for DdlSettings and [tool.ddlgen] project configuration."""

from pathlib import Path

import pytest

from ddlgen.core.config import (
    DdlSettings,
    ProjectConfig,
    clear_settings_cache,
    find_project_root,
    get_settings,
    load_project_config,
)
from ddlgen.core.errors import ConfigurationError


class TestDdlSettings:
    def test_defaults(self, tmp_path):
        settings = get_settings(project_root=tmp_path)
        assert settings.output_dir == Path("src/main/sql/ddl")
        assert settings.overlay_path is None
        assert settings.max_workers == 1
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.json_logs is False

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DDLGEN_OUTPUT_DIR", "build/ddl")
        monkeypatch.setenv("DDLGEN_MAX_WORKERS", "4")
        monkeypatch.setenv("DDLGEN_LOG_FORMAT", "JSON")
        settings = get_settings(project_root=tmp_path)
        assert settings.output_dir == Path("build/ddl")
        assert settings.max_workers == 4
        assert settings.json_logs is True

    def test_env_file_in_project_root(self, tmp_path):
        (tmp_path / ".env").write_text("DDLGEN_LOG_LEVEL=debug\n", encoding="utf-8")
        assert get_settings(project_root=tmp_path).log_level == "DEBUG"

    def test_invalid_values_rejected(self, monkeypatch):
        monkeypatch.setenv("DDLGEN_MAX_WORKERS", "0")
        with pytest.raises(ValueError):
            DdlSettings()

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError):
            DdlSettings(log_level="chatty")

    def test_cached_until_cleared(self, tmp_path, monkeypatch):
        first = get_settings(project_root=tmp_path)
        assert get_settings(project_root=tmp_path) is first
        monkeypatch.setenv("DDLGEN_MAX_WORKERS", "3")
        assert get_settings(project_root=tmp_path).max_workers == 1
        clear_settings_cache()
        assert get_settings(project_root=tmp_path).max_workers == 3


class TestProjectConfig:
    def test_find_project_root_walks_up(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == tmp_path.resolve()

    def test_missing_pyproject_gives_empty_config(self, tmp_path):
        assert load_project_config(tmp_path) == ProjectConfig()

    def test_missing_table_gives_empty_config(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
        assert load_project_config(tmp_path).namespaces == []

    def test_reads_table_and_anchors_paths(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            "[tool.ddlgen]\n"
            'output-dir = "build/ddl"\n'
            'namespaces = ["pkg.entities"]\n'
            'dialects = ["hsql", "postgresql9"]\n'
            "use-audit = true\n"
            'overlay = "persistence.xml"\n'
            'classpath = ["src", "/abs/root"]\n'
            "include-embeddables = false\n"
            "workers = 2\n",
            encoding="utf-8",
        )
        config = load_project_config(tmp_path)
        root = tmp_path.resolve()
        assert config.output_dir == root / "build/ddl"
        assert config.namespaces == ["pkg.entities"]
        assert config.dialects == ["hsql", "postgresql9"]
        assert config.use_audit is True
        assert config.include_drop is None
        assert config.overlay == root / "persistence.xml"
        assert config.classpath == [root / "src", Path("/abs/root")]
        assert config.include_embeddables is False
        assert config.workers == 2

    def test_unknown_key_rejected(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.ddlgen]\ncolour = 'red'\n", encoding="utf-8")
        with pytest.raises(ConfigurationError) as info:
            load_project_config(tmp_path)
        assert info.value.context.path == str(tmp_path.resolve() / "pyproject.toml")

    def test_invalid_toml_rejected(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.ddlgen\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_project_config(tmp_path)
