"""
Tests for the cmdbridge command-line interface.

The executor is replaced with the FakeExecutor fixture so that the
subcommands run end to end without starting real processes.
"""

from unittest.mock import patch

import pytest

from cmdbridge.cli.main import build_parser, main_cli, parse_bindings
from cmdbridge.validation import ValidationError


def run_cli(argv, executor):
    with patch("cmdbridge.cli.main.CommandExecutor", return_value=executor):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(argv)
    return exc_info.value.code


@pytest.mark.unit
class TestParseBindings:
    """Test cases for --set parsing."""

    def test_pairs(self):
        assert parse_bindings(["%s=C:/a b.txt", "{x}=1=2"]) == {"%s": "C:/a b.txt", "{x}": "1=2"}

    @pytest.mark.parametrize("pair", ["novalue", "=x"])
    def test_malformed(self, pair):
        with pytest.raises(ValidationError):
            parse_bindings([pair])


@pytest.mark.unit
class TestParser:
    """Test cases for argument parsing."""

    def test_kill_requires_target(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["kill"])

    def test_kill_targets_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["kill", "--pid", "1", "--name", "a.exe"])


@pytest.mark.unit
class TestMainCli:
    """Test cases for main_cli subcommands."""

    def test_ps(self, fake_executor, capsys):
        fake_executor.respond("tasklist", stdout='"notepad.exe","1234","Console","1","15,000 K"')
        assert run_cli(["ps"], fake_executor) == 0
        out = capsys.readouterr().out
        assert "notepad.exe" in out
        assert "15,000 K" in out

    def test_ps_filter(self, fake_executor, capsys):
        fake_executor.respond("tasklist", stdout='"a.exe","1","Console","1","1 K"\n"b.exe","2","Console","1","1 K"')
        run_cli(["ps", "--filter", "B."], fake_executor)
        out = capsys.readouterr().out
        assert "b.exe" in out
        assert "a.exe" not in out

    def test_kill_success(self, fake_executor, capsys):
        assert run_cli(["kill", "--pid", "1", "2"], fake_executor) == 0
        assert fake_executor.commands == ["taskkill /F /PID 1", "taskkill /F /PID 2"]
        assert "Successfully processed 2 items" in capsys.readouterr().out

    def test_kill_partial_failure(self, fake_executor, capsys):
        fake_executor.respond("/PID 2", stderr="denied", exit_succeeded=False)
        assert run_cli(["kill", "--pid", "1", "2"], fake_executor) == 2
        assert "1 succeeded, 1 failed" in capsys.readouterr().out

    def test_kill_total_failure(self, fake_executor):
        fake_executor.respond("taskkill", stderr="denied", exit_succeeded=False)
        assert run_cli(["kill", "--name", "a.exe"], fake_executor) == 1

    def test_run_template(self, fake_executor, capsys):
        fake_executor.respond("notepad.exe", stdout="opened")
        assert run_cli(["run", 'notepad.exe "%s"', "--set", "%s=C:/a b.txt"], fake_executor) == 0
        assert fake_executor.commands == ['notepad.exe "C:/a b.txt"']
        assert "opened" in capsys.readouterr().out

    def test_run_bad_template(self, fake_executor):
        assert run_cli(["run", 'notepad.exe "%s'], fake_executor) == 1
        assert fake_executor.commands == []

    def test_run_failed_command(self, fake_executor):
        fake_executor.respond("tool", stderr="bad", exit_succeeded=False)
        assert run_cli(["run", "tool"], fake_executor) == 1

    @patch("cmdbridge.system.tools.shutil.which", return_value=None)
    def test_which_missing(self, mock_which, fake_executor, capsys):
        assert run_cli(["which", "es.exe"], fake_executor) == 1
        assert "es.exe: not found" in capsys.readouterr().out

    def test_search(self, fake_executor, capsys):
        fake_executor.respond("es.exe", stdout="C:\\a.txt\r\nC:\\b.txt")
        assert run_cli(["search", "*.txt", "-n", "2"], fake_executor) == 0
        assert fake_executor.commands == ["es.exe -n 2 *.txt"]
        assert capsys.readouterr().out.splitlines() == ["C:\\a.txt", "C:\\b.txt"]

    def test_screenshots_without_root(self, fake_executor):
        assert run_cli(["screenshots", "list"], fake_executor) == 1

    def test_missing_config_file(self, fake_executor, temp_dir):
        assert run_cli(["--config", str(temp_dir / "absent.toml"), "ps"], fake_executor) == 1

    def test_custom_config_file(self, fake_executor, temp_dir, capsys):
        shots = temp_dir / "shots"
        config_path = temp_dir / "config.toml"
        config_path.write_text(f'[paths]\nscreenshots_root = "{shots.as_posix()}"\n')
        assert run_cli(["--config", str(config_path), "screenshots", "list"], fake_executor) == 0
        assert "No screenshots found this month." in capsys.readouterr().out
