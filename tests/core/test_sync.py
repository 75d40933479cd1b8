"""Tests for write-if-changed synchronisation."""

import os

import pytest

from ddlgen.core.dialect import resolve
from ddlgen.core.errors import DdlIOError, DestinationConflictError
from ddlgen.core.sync import SyncOutcome, ensure_directory, script_name, sync

HSQL = resolve("hsql")


@pytest.fixture
def scratch(tmp_path):
    path = tmp_path / "scratch"
    path.mkdir()
    return path


class TestEnsureDirectory:
    def test_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_directory(target) == target
        assert target.is_dir()

    def test_existing_directory_is_fine(self, tmp_path):
        ensure_directory(tmp_path)
        ensure_directory(tmp_path)
        assert tmp_path.is_dir()

    def test_file_in_the_way(self, tmp_path):
        blocker = tmp_path / "out"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(DestinationConflictError) as info:
            ensure_directory(blocker)
        assert info.value.context.path == str(blocker)

    def test_file_in_parent_chain(self, tmp_path):
        blocker = tmp_path / "out"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises((DestinationConflictError, DdlIOError)):
            ensure_directory(blocker / "ddl")


class TestSync:
    def test_script_name(self):
        assert script_name(resolve("POSTGRESQL9")) == "postgresql9.sql"

    def test_creates_missing_file(self, tmp_path, scratch):
        out = tmp_path / "out"
        outcome = sync(HSQL, "create table t (id integer);\n", out, scratch_dir=scratch)
        assert outcome == SyncOutcome(path=out / "hsql.sql", changed=True)
        assert outcome.path.read_text(encoding="utf-8") == "create table t (id integer);\n"
        assert (scratch / "hsql.sql").exists()

    def test_identical_content_leaves_file_untouched(self, tmp_path, scratch):
        out = tmp_path / "out"
        first = sync(HSQL, "same;\n", out, scratch_dir=scratch)
        past = 1_000_000_000
        os.utime(first.path, (past, past))

        second = sync(HSQL, "same;\n", out, scratch_dir=scratch)

        assert second.changed is False
        assert os.stat(second.path).st_mtime == past

    def test_different_content_replaces_file(self, tmp_path, scratch):
        out = tmp_path / "out"
        sync(HSQL, "old;\n", out, scratch_dir=scratch)
        outcome = sync(HSQL, "new;\n", out, scratch_dir=scratch)
        assert outcome.changed is True
        assert outcome.path.read_text(encoding="utf-8") == "new;\n"

    def test_bytes_are_written_without_newline_translation(self, tmp_path, scratch):
        out = tmp_path / "out"
        outcome = sync(HSQL, "a;\r\nb;\né;\n", out, scratch_dir=scratch)
        assert outcome.path.read_bytes() == "a;\r\nb;\né;\n".encode("utf-8")

    def test_unrelated_files_are_not_touched(self, tmp_path, scratch):
        out = tmp_path / "out"
        out.mkdir()
        other = out / "notes.txt"
        other.write_text("keep", encoding="utf-8")
        past = 1_000_000_000
        os.utime(other, (past, past))

        sync(HSQL, "x;\n", out, scratch_dir=scratch)

        assert other.read_text(encoding="utf-8") == "keep"
        assert os.stat(other).st_mtime == past

    def test_private_scratch_directory_when_none_given(self, tmp_path):
        outcome = sync(HSQL, "x;\n", tmp_path / "out")
        assert outcome.changed is True
        assert outcome.path.read_text(encoding="utf-8") == "x;\n"

    def test_destination_conflict(self, tmp_path, scratch):
        blocker = tmp_path / "out"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(DestinationConflictError):
            sync(HSQL, "x;\n", blocker, scratch_dir=scratch)

    def test_missing_scratch_directory_is_io_error(self, tmp_path):
        with pytest.raises(DdlIOError) as info:
            sync(HSQL, "x;\n", tmp_path / "out", scratch_dir=tmp_path / "no-such-dir")
        assert info.value.context.dialect == "HSQL"
