"""gosym CLI - print the symbols of Go packages, one occurrence per line."""

from pathlib import Path

import click

from gosym.config.loader import load_config
from gosym.config.models import ScanOptions
from gosym.core.errors import ConfigError, InvariantError
from gosym.core.logging import configure_logging, set_run_id
from gosym.symbols.kinds import DEFAULT_KINDS, parse_kinds
from gosym.symbols.ops import SymbolScanner

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

EPILOG = """\b
Each line printed has the following format:
  file:line:col: package referenced-package [local]expr kind[+] [type]
"""


@click.command(epilog=EPILOG)
@click.version_option(version="0.1.0", prog_name="gosym")
@click.option("-v", "--verbose", is_flag=True, help="Print warnings for unresolved symbols.")
@click.option(
    "-k",
    "--kinds",
    default=DEFAULT_KINDS,
    show_default=True,
    help="Kinds of symbol to include (comma-separated).",
)
@click.option("-t", "--type", "print_type", is_flag=True, help="Print symbol type.")
@click.option("-a", "--all", "include_all", is_flag=True, help="Print internal and universe symbols too.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ~/.config/gosym/config.yaml).",
)
@click.argument("pkgpaths", nargs=-1, required=True)
def cli(
    verbose: bool,
    kinds: str,
    print_type: bool,
    include_all: bool,
    log_level: str | None,
    config_path: Path | None,
    pkgpaths: tuple[str, ...],
) -> None:
    """Print every identifier and selector in PKGPATHS with what it refers to.

    PKGPATHS are import paths looked up under $GOPATH/src and $GOROOT/src,
    or directories when they start with "." or "/".
    """
    try:
        mask = parse_kinds(kinds)
        config = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(e.message) from e

    level = log_level or config.logging.level
    if verbose and log_level is None and level in ("WARNING", "ERROR", "CRITICAL"):
        level = "INFO"
    configure_logging(config=config.logging.model_copy(update={"level": level.upper()}))
    set_run_id()

    options = ScanOptions(verbose=verbose, print_type=print_type, include_all=include_all, kinds=mask)
    scanner = SymbolScanner(config, options)
    try:
        for line in scanner.scan(pkgpaths):
            click.echo(str(line))
    except InvariantError as e:
        detail = ", ".join(f"{k}={v}" for k, v in e.details.items())
        raise click.ClickException(f"{e.message} ({detail})" if detail else e.message) from e


if __name__ == "__main__":
    cli()
