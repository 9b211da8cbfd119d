"""
Tests for the command line interface.

Uses click's CliRunner; no ledger access is needed apart from the demo,
which runs against the in-memory ledger.
"""

import pytest
from click.testing import CliRunner

from ensauction.cli.main import cli
from ensauction.utils.logger import setup_logging

ALICE = "0x" + "aa" * 20

FOO_ETH = "de9b09fd7c5f901e23a3f19fecc54828e9c848539801e86591bd9801b019f84f"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    # The runner swaps stderr; point the handler back at the real one
    setup_logging()


class TestHash:

    def test_hash(self, runner):
        result = runner.invoke(cli, ["hash", "foo.eth"])
        assert result.exit_code == 0
        assert result.output.strip() == FOO_ETH

    def test_hash_qualifies(self, runner):
        result = runner.invoke(cli, ["hash", "FOO"])
        assert result.exit_code == 0
        assert result.output.strip() == FOO_ETH

    def test_hash_upper_case_suffix(self, runner):
        result = runner.invoke(cli, ["hash", "foo.ETH"])
        assert result.exit_code == 0
        assert result.output.strip() == FOO_ETH

    def test_hash_invalid(self, runner):
        result = runner.invoke(cli, ["hash", "foo..eth"])
        assert result.exit_code == 1

    def test_quiet(self, runner):
        result = runner.invoke(cli, ["-q", "hash", "foo.eth"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_labelhash(self, runner):
        result = runner.invoke(cli, ["labelhash", "eth"])
        assert result.output.strip() == (
            "4f5b812789fc606be1b3b16908db13fc7a9adf7ca72641f84d75b47069d3d7f0"
        )

    def test_normalize(self, runner):
        result = runner.invoke(cli, ["normalize", "FooBar.ETH"])
        assert result.output.strip() == "foobar.eth"


class TestCheck:

    def test_valid(self, runner):
        result = runner.invoke(cli, ["check", "verylongname"])
        assert result.exit_code == 0
        assert "verylongname.eth is valid" in result.output

    def test_upper_case_suffix(self, runner):
        result = runner.invoke(cli, ["check", "verylongname.ETH"])
        assert result.exit_code == 0
        assert "verylongname.eth is valid" in result.output

    def test_too_short(self, runner):
        result = runner.invoke(cli, ["check", "short.eth"])
        assert result.exit_code == 1

    def test_too_short_quiet(self, runner):
        result = runner.invoke(cli, ["--quiet", "check", "short.eth"])
        assert result.exit_code == 1
        assert result.output == ""


class TestSeal:

    def test_seal(self, runner):
        result = runner.invoke(
            cli, ["seal", "verylongname", "-a", ALICE, "-b", "1 ether", "-m", "3 ether", "-s", "secret"]
        )
        assert result.exit_code == 0
        assert "Sealed bid is 0x" in result.output
        assert "Deposit is 3 Ether" in result.output

    def test_seal_deterministic(self, runner):
        args = ["seal", "verylongname.eth", "-a", ALICE, "-s", "secret"]
        assert runner.invoke(cli, args).output == runner.invoke(cli, args).output

    def test_default_bid(self, runner):
        result = runner.invoke(cli, ["seal", "verylongname", "-a", ALICE, "-s", "secret"])
        assert "Deposit is 0.01 Ether" in result.output

    def test_missing_salt(self, runner):
        result = runner.invoke(cli, ["seal", "verylongname", "-a", ALICE])
        assert result.exit_code == 1

    def test_bad_amount(self, runner):
        result = runner.invoke(cli, ["seal", "verylongname", "-a", ALICE, "-s", "x", "-b", "lots"])
        assert result.exit_code == 1

    def test_address_required(self, runner):
        result = runner.invoke(cli, ["seal", "verylongname", "-s", "secret"])
        assert result.exit_code != 0


class TestDemo:

    def test_demo(self, runner):
        result = runner.invoke(cli, ["demo"])
        assert result.exit_code == 0, result.output
        assert "verylongname.eth: Available" in result.output
        assert "pays 1 Ether" in result.output
        assert "verylongname.eth: Owned" in result.output

    def test_demo_short_name(self, runner):
        result = runner.invoke(cli, ["demo", "--name", "short.eth"])
        assert result.exit_code == 1
