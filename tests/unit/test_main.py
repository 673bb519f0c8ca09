"""Tests for __main__.py: argument handling, base directory precedence, exit codes."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest
import yaml

from absolve.__main__ import main

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX filesystem layout")


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in ("ABSOLVE_ALLOWED_PREFIXES", "ABSOLVE_BASE_DIR", "ABSOLVE_OUTPUT", "ABSOLVE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config_file = tmp_path / "config.yaml"
    monkeypatch.setenv("ABSOLVE_CONFIG", str(config_file))
    return config_file


@pytest.fixture()
def tree(tmp_path: Path) -> Path:
    root = tmp_path / "tree"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "file.txt").touch()
    return root


class TestResolve:
    def test_resolves_against_base(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--base", str(tree), "a/b/../file.txt"])
        out = capsys.readouterr().out
        assert out.strip() == os.path.realpath(tree / "a" / "file.txt")

    def test_multiple_paths_in_order(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-b", str(tree), "a/b", "a"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [os.path.realpath(tree / "a" / "b"), os.path.realpath(tree / "a")]

    def test_defaults_to_current_dir(
        self, tree: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tree / "a")
        main(["b"])
        assert capsys.readouterr().out.strip() == os.path.realpath(tree / "a" / "b")

    def test_config_base_dir_used_without_flag(
        self, tree: Path, _isolated_config: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _isolated_config.write_text(yaml.dump({"cli": {"base_dir": str(tree / "a")}}))
        main(["b"])
        assert capsys.readouterr().out.strip() == os.path.realpath(tree / "a" / "b")

    def test_flag_wins_over_config_base_dir(
        self, tree: Path, _isolated_config: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _isolated_config.write_text(yaml.dump({"cli": {"base_dir": "/nonexistent-base"}}))
        main(["--base", str(tree), "a"])
        assert capsys.readouterr().out.strip() == os.path.realpath(tree / "a")

    def test_absolute_path_passes_through(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["/no/such/path/anywhere"])
        assert capsys.readouterr().out.strip() == "/no/such/path/anywhere"


class TestFailures:
    def test_missing_target_exits_1(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--base", str(tree), "missing"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "(io)" in err
        assert "missing" in err

    def test_relative_base_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--base", "relative/base", "x"])
        assert exc_info.value.code == 1
        assert "current_is_relative" in capsys.readouterr().err

    def test_partial_failure_still_prints_successes(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--base", str(tree), "a", "missing"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out.strip() == os.path.realpath(tree / "a")
        assert "missing" in captured.err

    def test_invalid_config_exits_1(self, _isolated_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _isolated_config.write_text(yaml.dump({"resolver": {"allowed_prefixes": ["unc"]}}))
        with pytest.raises(SystemExit) as exc_info:
            main(["/tmp"])
        assert exc_info.value.code == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_no_paths_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2


class TestJsonOutput:
    def test_json_records(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--json", "--base", str(tree), "a", "missing"])
        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert records[0] == {"path": "a", "resolved": os.path.realpath(tree / "a")}
        assert records[1]["path"] == "missing"
        assert records[1]["kind"] == "io"
        assert "resolved" not in records[1]

    def test_json_from_config(self, tree: Path, _isolated_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _isolated_config.write_text(yaml.dump({"cli": {"output": "json"}}))
        main(["--base", str(tree), "a"])
        record = json.loads(capsys.readouterr().out)
        assert record["resolved"] == os.path.realpath(tree / "a")

    def test_explicit_config_flag(self, tree: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        other = tmp_path / "other.yaml"
        other.write_text(yaml.dump({"cli": {"output": "json", "base_dir": str(tree)}}))
        main(["--config", str(other), "a"])
        record = json.loads(capsys.readouterr().out)
        assert record == {"path": "a", "resolved": os.path.realpath(tree / "a")}


class TestPathsPrintedVerbatim:
    """Names that Rich would otherwise rewrite (emoji codes, tabs) come back unchanged."""

    @pytest.mark.parametrize("name", [":smile:", "a\tb"])
    def test_text_mode(self, name: str, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tree / name).mkdir()
        main(["--base", str(tree), name])
        assert capsys.readouterr().out == os.path.realpath(tree / name) + "\n"

    @pytest.mark.parametrize("name", [":smile:", "a\tb"])
    def test_json_mode(self, name: str, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tree / name).mkdir()
        main(["--json", "--base", str(tree), name])
        record = json.loads(capsys.readouterr().out)
        assert record == {"path": name, "resolved": os.path.realpath(tree / name)}

    def test_error_keeps_emoji_code(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--base", str(tree), ":smile:"])
        assert ":smile:" in capsys.readouterr().err
