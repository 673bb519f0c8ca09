"""Tests for the CLI renderer."""

from __future__ import annotations

import errno
import json

import pytest

from absolve.cli.renderer import render_error, render_json, render_resolved, result_record
from absolve.errors import CurrentIsRelativeError, ResolveIOError


class TestResultRecord:
    def test_success(self) -> None:
        assert result_record("a", resolved="/x/a") == {"path": "a", "resolved": "/x/a"}

    def test_error(self) -> None:
        record = result_record("a", error=CurrentIsRelativeError("base"))
        assert record["path"] == "a"
        assert record["kind"] == "current_is_relative"
        assert "relative" in record["error"]
        assert "resolved" not in record


class TestRender:
    def test_resolved_goes_to_stdout_verbatim(self, capsys: pytest.CaptureFixture[str]) -> None:
        render_resolved(r"C:\[weird]\path")
        captured = capsys.readouterr()
        assert captured.out == "C:\\[weird]\\path\n"
        assert captured.err == ""

    def test_error_goes_to_stderr_with_kind(self, capsys: pytest.CaptureFixture[str]) -> None:
        err = ResolveIOError(FileNotFoundError(errno.ENOENT, "No such file or directory", "[gone]"))
        render_error("[gone]", err)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "(io)" in captured.err
        assert "[gone]" in captured.err
        assert "No such file or directory" in captured.err

    def test_json_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        render_json([{"path": "a", "resolved": "/a"}, {"path": "b", "resolved": "/b"}])
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line)["path"] for line in lines] == ["a", "b"]
