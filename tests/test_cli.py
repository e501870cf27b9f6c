"""Tests for duolog.cli — argument parsing and the start-up sequence."""

import json
import re
import subprocess
import sys

import pytest

from duolog.cli import _build_parser, _extract_debug_flag, main
from duolog.lib.log_lib import FileState, get_diagnostics


class TestDebugFlagExtraction:
    """First pass: the -debug token may appear anywhere."""

    def test_token_removed(self):
        debug, remaining = _extract_debug_flag(["-debug", "--level", "error"])
        assert debug is True
        assert remaining == ["--level", "error"]

    def test_token_after_message(self):
        debug, remaining = _extract_debug_flag(["hello", "-DEBUG"])
        assert debug is True
        assert remaining == ["hello"]

    def test_no_token(self):
        debug, remaining = _extract_debug_flag(["--debug", "x"])
        assert debug is False
        assert remaining == ["--debug", "x"]

    def test_empty_argv(self):
        assert _extract_debug_flag([]) == (False, [])


class TestParser:

    def test_defaults(self):
        args = _build_parser().parse_args([])
        assert args.log_file is None
        assert args.log_dir is None
        assert args.console_filter is None
        assert args.file_filter is None
        assert args.level == "info"
        assert args.component == "App"
        assert args.show_levels is False
        assert args.status is False
        assert args.message == []

    def test_message_words(self):
        args = _build_parser().parse_args(["cache", "warmed"])
        assert args.message == ["cache", "warmed"]


@pytest.fixture
def cli_env(tmp_home, workdir):
    """Isolated home (log dir, global config) and working directory."""
    return tmp_home / "Documents" / "Logs"


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


class TestMainEntryPoint:
    """Test main() with various argv inputs."""

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "duolog" in capsys.readouterr().out

    def test_help_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "-debug" in capsys.readouterr().out

    def test_show_levels(self, capsys):
        assert main(["--show-levels"]) == 0
        out = capsys.readouterr().out
        assert "VERBOSE" in out and "ALL" in out

    def test_without_debug_console_is_silent(self, cli_env, capsys):
        assert main(["hello"]) == 0
        assert capsys.readouterr().out == ""
        lines = _lines(cli_env / "duolog.log")
        assert len(lines) == 2
        assert "[INFO] [App] Starting duolog " in lines[0]
        assert lines[1].endswith("[INFO] [App] hello")

    def test_debug_enables_console(self, cli_env, capsys):
        assert main(["-debug", "hello", "world"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 2
        assert re.search(r"\[INFO\] \[App\] Starting duolog \S+", out[0])
        assert out[1].endswith("[INFO] [App] hello world")
        assert get_diagnostics().console.enabled

    def test_debug_any_case_any_position(self, cli_env, capsys):
        assert main(["hello", "-DeBuG"]) == 0
        assert "hello" in capsys.readouterr().out

    def test_level_and_component(self, cli_env, capsys):
        assert main(["-debug", "--level", "error",
                     "--component", "Loader", "boom"]) == 0
        assert "[ERROR] [Loader] boom" in capsys.readouterr().out
        assert "[ERROR] [Loader] boom" in _lines(cli_env / "duolog.log")[-1]

    def test_console_filter(self, cli_env, capsys):
        assert main(["-debug", "--console-filter", "error|warning",
                     "--level", "warning", "careful"]) == 0
        out = capsys.readouterr().out
        assert "Starting" not in out
        assert "[WARNING] [App] careful" in out
        # The file channel keeps its own (default) filter
        assert "Starting" in _lines(cli_env / "duolog.log")[0]

    def test_file_filter(self, cli_env):
        assert main(["--file-filter", "error", "quiet"]) == 0
        assert _lines(cli_env / "duolog.log") == []

    def test_log_file_name(self, cli_env):
        assert main(["--log-file", "custom.log", "x"]) == 0
        assert (cli_env / "custom.log").is_file()
        assert not (cli_env / "duolog.log").exists()

    def test_log_dir_override(self, cli_env, tmp_path):
        target = tmp_path / "elsewhere"
        assert main(["--log-dir", str(target), "x"]) == 0
        assert (target / "duolog.log").is_file()

    def test_each_run_truncates(self, cli_env):
        main(["first"])
        main(["second"])
        lines = _lines(cli_env / "duolog.log")
        assert len(lines) == 2
        assert lines[1].endswith("second")

    def test_project_config(self, cli_env, workdir):
        (workdir / ".duolog.json").write_text(json.dumps({
            "app": {"log_name": "project.log"},
            "file": {"filter": "error|info"},
        }))
        assert main(["--level", "verbose", "dropped"]) == 0
        lines = _lines(cli_env / "project.log")
        assert len(lines) == 1
        assert "Starting" in lines[0]

    def test_status(self, cli_env, capsys):
        assert main(["--status"]) == 0
        out = capsys.readouterr().out
        assert "console: disabled" in out
        assert "file:    ready" in out
        assert str(cli_env / "duolog.log") in out

    def test_unwritable_log_dir_does_not_fail(self, tmp_home, workdir, capsys):
        (tmp_home / "Documents").write_text("in the way")
        assert main(["-debug", "still runs"]) == 0
        captured = capsys.readouterr()
        assert "Failed to create log directory" in captured.err
        assert "still runs" in captured.out
        assert get_diagnostics().file.state is FileState.DISABLED

    def test_bad_filter_spec(self, cli_env, capsys):
        assert main(["--console-filter", "error|loud"]) == 2
        assert "Unknown severity level" in capsys.readouterr().err

    def test_level_must_be_single(self, cli_env, capsys):
        assert main(["--level", "all", "x"]) == 2
        assert "exactly one level" in capsys.readouterr().err


class TestEntryPoints:
    """The module entry point runs the same main()."""

    def test_python_m_version(self):
        result = subprocess.run(
            [sys.executable, "-m", "duolog", "--version"],
            capture_output=True, text=True, timeout=30,
        )
        assert result.returncode == 0
        assert "duolog" in result.stdout
