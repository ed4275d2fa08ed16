from unittest.mock import MagicMock

import pytest
import requests
import structlog
from click.testing import CliRunner

from deadyet import cli as cli_module
from deadyet.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


class TestCheckCommands:
    """Test suite for the check and dead commands"""

    def test_check_found(self, runner):
        """The pattern is found in the number"""
        result = runner.invoke(cli, ["check", "0x12DEAD34", "DEAD"])
        assert result.exit_code == 0
        assert "find 0xDEAD in 0x12DEAD34 -> true" in result.output

    def test_check_not_found(self, runner):
        """Decimal numbers are accepted too"""
        result = runner.invoke(cli, ["check", "12345", "DEAD"])
        assert result.exit_code == 0
        assert "-> false" in result.output

    def test_dead(self, runner):
        """yes or no"""
        assert runner.invoke(cli, ["dead", "0xDEAD0"]).output.strip() == "yes"
        assert runner.invoke(cli, ["dead", "0xDEAE0"]).output.strip() == "no"

    def test_bad_number(self, runner):
        """Malformed numbers are usage errors"""
        result = runner.invoke(cli, ["dead", "0xZZ"])
        assert result.exit_code == 2
        assert "not a valid" in result.output

    def test_negative_number(self, runner):
        """Negative numbers are outside the domain"""
        result = runner.invoke(cli, ["dead", "--", "-5"])
        assert result.exit_code == 2


class TestNextCommand:
    """Test suite for the next command"""

    def test_next(self, runner):
        """Offset and target are printed"""
        result = runner.invoke(cli, ["next", "0xDEACFF"])
        assert result.exit_code == 0
        assert "offset 1 (0x1) -> 0xDEAD00" in result.output

    def test_next_custom_pattern(self, runner):
        """Pattern and mask are hex options"""
        result = runner.invoke(cli, ["next", "0xAAAAA", "--pattern", "ABBA", "--mask", "FFFF"])
        assert result.exit_code == 0
        assert "offset 272 (0x110)" in result.output

    def test_next_ignore_digits(self, runner):
        """Ignoring low digits uses a single alignment"""
        result = runner.invoke(cli, ["next", "0xDEAE0", "--ignore-digits", "1"])
        assert result.exit_code == 0
        assert "(0xFFFF0)" in result.output

    def test_next_unsatisfiable(self, runner):
        """No possible match is reported plainly"""
        result = runner.invoke(cli, ["next", "0x1", "--ignore-digits", "15"])
        assert result.exit_code == 0
        assert "no match" in result.output

    def test_next_invalid_alignment(self, runner):
        """Alignments past 64 bits are domain errors"""
        result = runner.invoke(cli, ["next", "0x1", "--ignore-digits", "16"])
        assert result.exit_code == 1
        assert "alignment" in result.output

    def test_next_narrow_mask(self, runner):
        """The mask must cover the pattern"""
        result = runner.invoke(cli, ["next", "0x1", "--mask", "FF"])
        assert result.exit_code == 1
        assert "narrower" in result.output


class TestListingCommands:
    """Test suite for the matches and ranges commands"""

    def test_matches(self, runner):
        """The table lists the requested number of matches"""
        result = runner.invoke(cli, ["matches", "0", "--count", "3"])
        assert result.exit_code == 0
        assert "0x1DEAD" in result.output
        assert "0x2DEAD" in result.output
        assert "0x3DEAD" not in result.output

    def test_ranges(self, runner):
        """The first DEAD range"""
        result = runner.invoke(cli, ["ranges", "0xDEAC0", "-n", "1"])
        assert result.exit_code == 0
        assert "0xDEAD0" in result.output
        assert "0xDEADF" in result.output

    def test_ranges_partial_mask(self, runner):
        """Ranges refuse partial masks"""
        result = runner.invoke(cli, ["ranges", "0", "--pattern", "DE0D", "--mask", "FF0F"])
        assert result.exit_code == 1
        assert "full mask" in result.output


class TestNowCommand:
    """Test suite for the now command"""

    def test_now(self, runner, monkeypatch):
        """The current time is read from the clock"""
        monkeypatch.setattr(cli_module, "current_unix", lambda: 0xDEAC0)
        result = runner.invoke(cli, ["now"])
        assert result.exit_code == 0
        assert "alive" in result.output
        assert "in 16 s" in result.output


class TestRemoteCommand:
    """Test suite for the remote command"""

    def test_remote(self, runner, monkeypatch):
        """The answer of the demo API is printed"""
        response = MagicMock(status_code=200)
        response.json.return_value = {"answer": "yes"}
        get = MagicMock(return_value=response)
        monkeypatch.setattr(cli_module.requests, "get", get)

        result = runner.invoke(cli, ["remote", "57005", "--endpoint", "http://api.test/"])
        assert result.exit_code == 0
        assert result.output.strip() == "yes"
        get.assert_called_once_with("http://api.test/dead_dec/57005", timeout=10)

    def test_remote_error_status(self, runner, monkeypatch):
        """A failing API is reported"""
        response = MagicMock(status_code=400, text="bad")
        monkeypatch.setattr(cli_module.requests, "get", MagicMock(return_value=response))
        result = runner.invoke(cli, ["remote", "1"])
        assert result.exit_code == 1
        assert "400" in result.output

    def test_remote_unreachable(self, runner, monkeypatch):
        """Connection errors are reported"""
        monkeypatch.setattr(
            cli_module.requests, "get",
            MagicMock(side_effect=requests.ConnectionError("refused")),
        )
        result = runner.invoke(cli, ["remote", "1"])
        assert result.exit_code == 1
        assert "Failed to reach" in result.output
