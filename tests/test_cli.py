"""Tests for the helmsman launcher CLI (click entry point)."""

import sys

import pytest
from click.testing import CliRunner

from helmsman.__main__ import _click_main

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX shell scripts")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "HELMSMAN_PREFIX",
        "HELMSMAN_LOCAL_DIR",
        "HELMSMAN_SEARCH_PATH",
        "HELMSMAN_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def bin_dir(tmp_path):
    d = tmp_path / "bin"
    d.mkdir()
    (d / "tool-status").write_text('command = {"description": "Show status"}\n')
    return d


def _invoke(bin_dir, *args):
    return CliRunner().invoke(_click_main, ["--local-dir", str(bin_dir), "--prefix", "tool", *args])


class TestLauncher:
    def test_help_passed_to_dispatcher(self, bin_dir):
        result = _invoke(bin_dir, "--help")
        assert result.exit_code == 0
        assert "Commands:" in result.output
        assert "Show status" in result.output

    def test_no_args_lists(self, bin_dir):
        result = _invoke(bin_dir)
        assert result.exit_code == 0
        assert "help <sub-command>" in result.output

    def test_version_passed_to_dispatcher(self, bin_dir):
        pyproject = bin_dir.parent / "pyproject.toml"
        pyproject.write_text('[project]\nname = "tool"\nversion = "2.0"\n')
        result = _invoke(bin_dir, "--version")
        assert result.exit_code == 0
        assert "tool: 2.0" in result.output

    def test_unknown_command(self, bin_dir):
        result = _invoke(bin_dir, "delete")
        assert result.exit_code == 1
        assert "delete" in result.output

    def test_strict_metadata(self, bin_dir):
        (bin_dir / "tool-broken").write_text("def (:\n")
        result = _invoke(bin_dir, "--strict-metadata", "status")
        assert result.exit_code == 1
        assert "tool-broken" in result.output

    def test_broken_metadata_ignored_by_default(self, bin_dir):
        (bin_dir / "tool-broken").write_text("def (:\n")
        result = _invoke(bin_dir, "--help")
        assert result.exit_code == 0
        assert "broken" in result.output

    @posix_only
    def test_runs_subcommand(self, bin_dir):
        script = bin_dir / "tool-fail"
        script.write_text("#!/bin/sh\nexit 4\n")
        script.chmod(0o755)
        result = _invoke(bin_dir, "fail")
        assert result.exit_code == 4

    @posix_only
    def test_options_after_command_are_forwarded(self, bin_dir):
        script = bin_dir / "tool-check"
        script.write_text('#!/bin/sh\n[ "$1" = "-p" ] && [ "$2" = "x" ]\n')
        script.chmod(0o755)
        result = _invoke(bin_dir, "check", "-p", "x")
        assert result.exit_code == 0
