"""Tests for the gosym command line."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from gosym.cli.main import cli

FOO = 'package foo\n\nimport "some/bar"\n\nfunc Run() {\n\tbar.Baz()\n}\n'
BAR = "package bar\n\nfunc Baz() {}\n"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def env(gopath: Path, tmp_path: Path) -> dict[str, str]:
    """Environment with the fake GOPATH and no GOROOT or user config overrides."""
    return {"GOPATH": str(gopath), "GOROOT": "", "HOME": str(tmp_path / "home")}


def _args(tmp_path: Path, *args: str) -> list[str]:
    return ["--config", str(tmp_path / "none.yaml"), *args]


class TestArguments:
    """Usage errors exit with status 2."""

    def test_given_no_packages_then_usage_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])

        assert result.exit_code == 2
        assert "PKGPATHS" in result.output

    def test_given_unknown_kind_then_usage_error(self, runner: CliRunner, env: dict[str, str], tmp_path: Path) -> None:
        result = runner.invoke(cli, _args(tmp_path, "-k", "struct", "examples/foo"), env=env)

        assert result.exit_code == 2
        assert "unknown type kind 'struct'" in result.output

    def test_given_empty_kind_list_then_usage_error(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path
    ) -> None:
        result = runner.invoke(cli, _args(tmp_path, "-k", "", "examples/foo"), env=env)

        assert result.exit_code == 2

    def test_help_shows_line_format(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "[local]expr kind[+] [type]" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestOutput:
    """Symbol lines go to stdout."""

    def test_given_package_then_lines_printed(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path, write_package
    ) -> None:
        foo = write_package("examples/foo", {"foo.go": FOO})
        write_package("some/bar", {"bar.go": BAR})

        result = runner.invoke(cli, _args(tmp_path, "-k", "func", "examples/foo"), env=env)

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == [
            f"{foo / 'foo.go'}:5:6: examples/foo examples/foo Runfunc+",
            f"{foo / 'foo.go'}:6:6: examples/foo some/bar Bazfunc",
        ]

    def test_given_type_flag_then_type_text(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path, write_package
    ) -> None:
        write_package("examples/foo", {"foo.go": "package foo\n\nvar n = 3\n"})

        result = runner.invoke(cli, _args(tmp_path, "-t", "-k", "var", "examples/foo"), env=env)

        assert result.exit_code == 0, result.output
        assert result.stdout.strip().endswith("nvar+ int")

    def test_given_all_flag_then_universe_symbols(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path, write_package
    ) -> None:
        write_package("examples/foo", {"foo.go": "package foo\n\nvar n int\n"})

        plain = runner.invoke(cli, _args(tmp_path, "-k", "type", "examples/foo"), env=env)
        everything = runner.invoke(cli, _args(tmp_path, "-a", "-k", "type", "examples/foo"), env=env)

        assert plain.stdout == ""
        assert everything.stdout.strip().endswith("examples/foo universe inttype")

    def test_given_missing_package_then_warning_on_stderr_and_success(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path
    ) -> None:
        result = runner.invoke(cli, _args(tmp_path, "example.com/missing"), env=env)

        assert result.exit_code == 0
        assert result.stdout == ""
        assert "package.load_failed" in result.stderr

    def test_given_verbose_then_unresolved_reported(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path, write_package
    ) -> None:
        write_package("examples/foo", {"foo.go": "package foo\n\nvar v = missing\n"})

        result = runner.invoke(cli, _args(tmp_path, "-v", "examples/foo"), env=env)

        assert result.exit_code == 0
        assert "no object for expression" in result.stderr
        assert "no object" not in result.stdout

    def test_given_config_file_then_log_level_applied(
        self, runner: CliRunner, env: dict[str, str], tmp_path: Path
    ) -> None:
        config_file = tmp_path / "gosym.yaml"
        config_file.write_text("logging:\n  level: ERROR\n")

        result = runner.invoke(cli, ["--config", str(config_file), "example.com/missing"], env=env)

        assert result.exit_code == 0
        assert "package.load_failed" not in result.stderr
