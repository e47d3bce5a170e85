"""Tests for the process runner"""
from unittest.mock import patch

from fracture.utils import process
from fracture.utils.process import COMMAND_NOT_FOUND, run, run_interactive


class TestRun:
    """Test captured command execution."""

    def test_captures_output(self, temp_dir):
        result = run(["sh", "-c", "echo out; echo err >&2"], cwd=temp_dir)
        assert result.success
        assert result.stdout == "out"
        assert result.stderr == "err"

    def test_failure_keeps_returncode(self):
        result = run(["sh", "-c", "exit 3"])
        assert not result.success
        assert result.returncode == 3

    def test_undecodable_output_is_replaced(self):
        result = run(["sh", "-c", "printf 'bad \\377\\376' >&2; exit 1"])
        assert result.returncode == 1
        assert result.stderr.startswith("bad ")
        assert "�" in result.stderr

    def test_missing_executable(self):
        result = run(["fracture-no-such-tool", "install"])
        assert result.returncode == COMMAND_NOT_FOUND
        assert result.stderr == "fracture-no-such-tool: command not found"

    def test_non_executable_file(self, temp_dir):
        tool = temp_dir / "tool"
        tool.write_text("#!/bin/sh\nexit 0\n")
        tool.chmod(0o644)

        result = run([str(tool)])

        assert result.returncode == 1
        assert result.stderr

    def test_stdin_is_closed(self):
        result = run(["sh", "-c", "read line || echo eof"])
        assert result.stdout == "eof"


class TestRunInteractive:
    """Test terminal-attached execution."""

    def test_returns_exit_status(self):
        assert run_interactive(["sh", "-c", "exit 4"]) == 4

    def test_missing_executable(self):
        assert run_interactive(["fracture-no-such-shell"]) == COMMAND_NOT_FOUND

    def test_permission_error(self):
        with patch.object(process.subprocess, "run", side_effect=PermissionError("denied")):
            assert run_interactive(["/bin/sh"]) == 1
