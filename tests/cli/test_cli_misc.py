"""Tests for the root callback, ``ddlgen dialects`` and ``ddlgen config show``."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from ddlgen import __version__
from ddlgen.cli.app import app
from ddlgen.core.dialect import dialect_identifiers

runner = CliRunner()


class TestRootCallback:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"ddlgen {__version__}"

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "generate" in result.output
        assert "dialects" in result.output

    def test_bad_log_level(self):
        result = runner.invoke(app, ["--log-level", "chatty", "dialects"])
        assert result.exit_code == 1
        assert "CHATTY" in result.output

    def test_bad_environment_settings(self, monkeypatch):
        monkeypatch.setenv("DDLGEN_MAX_WORKERS", "0")
        result = runner.invoke(app, ["dialects"])
        assert result.exit_code == 1
        assert "DDLGEN_" in result.output


class TestDialectsCommand:
    def test_json_lists_every_dialect(self):
        result = runner.invoke(app, ["--log-level", "ERROR", "dialects", "--json"])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert [row["identifier"] for row in rows] == list(dialect_identifiers())
        hsql = next(row for row in rows if row["identifier"] == "HSQL")
        assert hsql["file"] == "hsql.sql"
        myisam = next(row for row in rows if row["identifier"] == "MYSQL_MYISAM")
        assert myisam["audit"] is False

    def test_table(self):
        result = runner.invoke(app, ["--log-level", "ERROR", "dialects"])
        assert result.exit_code == 0, result.output
        assert "POSTGRESQL9" in result.output


class TestConfigShow:
    def test_json(self, tmp_path, monkeypatch):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.ddlgen]\nnamespaces = ["app.entities"]\nuse-audit = true\n', encoding="utf-8"
        )
        monkeypatch.setenv("DDLGEN_MAX_WORKERS", "3")
        result = runner.invoke(
            app, ["--log-level", "ERROR", "config", "show", "--project-root", str(tmp_path), "--json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["project_root"] == str(tmp_path.resolve())
        assert payload["settings"]["max_workers"] == 3
        assert payload["project"] == {"namespaces": ["app.entities"], "use-audit": True}

    def test_text_without_project_table(self, tmp_path):
        result = runner.invoke(app, ["--log-level", "ERROR", "config", "show", "--project-root", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "Settings" in result.output
        assert "No [tool.ddlgen] table" in result.output
