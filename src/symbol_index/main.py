"""Command-line interface for the symbol index.

Loads symbol dumps into a local index and runs "go to symbol" style
queries against it.
"""

import asyncio
import json
import sys
import traceback
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Optional

import click

from .__version__ import __version__
from .config.exceptions import ConfigurationError
from .config.logging import configure_logging, get_logger
from .config.settings import Settings
from .models import load_symbols
from .search.exceptions import SymbolIndexError
from .search.index_schema import FqnIndex
from .search.index_service import IndexService

logger = get_logger(__name__)


class CLIError(Exception):
    """Base CLI error with user-friendly messages."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


class CLIContext:
    """Global CLI context management."""

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        config_file: Optional[str] = None,
        index_dir: Optional[str] = None,
    ):
        self.verbose = verbose
        self.quiet = quiet
        self.config_file = config_file
        self.settings = self.load_settings()
        if index_dir:
            index_path = Path(index_dir).absolute()
            self.settings.index.index_directory = str(index_path)

    def load_settings(self) -> Settings:
        """Load settings from the config file, if any, and the environment."""
        if not self.config_file:
            return Settings()
        try:
            return Settings.from_yaml(self.config_file)
        except ConfigurationError as e:
            raise CLIError(str(e), "Check YAML syntax and setting names")

    @property
    def index_path(self) -> Path:
        return self.settings.get_index_path()

    def open_service(self) -> IndexService:
        return IndexService.open(str(self.index_path), self.settings.index)


def handle_cli_error(error: Exception, verbose: bool = False) -> None:
    """Report an error to the user and exit."""
    if isinstance(error, CLIError):
        click.echo(f"Error: {error.message}", err=True)
        if error.suggestion:
            click.echo(f"Suggestion: {error.suggestion}", err=True)
    elif isinstance(error, SymbolIndexError):
        click.echo(f"Index error: {error}", err=True)
    else:
        click.echo(f"Unexpected error: {error}", err=True)
        if verbose:
            click.echo(traceback.format_exc(), err=True)
        else:
            click.echo(
                "Run with --verbose for detailed error information", err=True
            )
    sys.exit(1)


def _run(ctx: click.Context, coro: Awaitable[Any]) -> Any:
    try:
        return asyncio.run(coro)
    except click.ClickException:
        raise
    except Exception as e:
        handle_cli_error(e, ctx.obj.get("verbose", False))


def _display_entries(entries: List[FqnIndex], output_format: str) -> None:
    if output_format == "json":
        click.echo(
            json.dumps(
                [{"type": e.TYPE.value, "fqn": e.fqn} for e in entries],
                indent=2,
            )
        )
        return

    if not entries:
        click.echo("No matches")
        return
    for entry in entries:
        click.echo(f"{entry.TYPE.value:<12} {entry.fqn}")


@click.group()
@click.version_option(version=__version__, prog_name="symbol-index")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with detailed logging",
)
@click.option(
    "--quiet", "-q", is_flag=True, help="Enable quiet mode with minimal output"
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Configuration file path (YAML format)",
)
@click.option(
    "--index-dir",
    "-d",
    type=click.Path(file_okay=False),
    help="Index directory (overrides configuration)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    config: Optional[str],
    index_dir: Optional[str],
):
    """Fully-qualified symbol name index.

    Index the classes, methods and fields of compiled code and look them up
    by prefix, abbreviation or camel case.

    \b
    Examples:
      symbol-index index symbols.jsonl
      symbol-index classes HashMap
      symbol-index search HaMa get
      symbol-index remove src/main/scala/Foo.scala
    """
    if verbose and quiet:
        raise click.BadParameter("Cannot use both --verbose and --quiet options")

    ctx.ensure_object(dict)
    try:
        cli_context = CLIContext(
            verbose=verbose, quiet=quiet, config_file=config, index_dir=index_dir
        )
    except CLIError as e:
        handle_cli_error(e)

    settings = cli_context.settings
    verbose = verbose or (settings.debug and not quiet)
    level = settings.logging.level
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    configure_logging(
        level=level,
        log_file=settings.logging.file_path,
        json_logs=settings.logging.json_format,
        enable_performance_logging=settings.logging.enable_performance,
    )

    ctx.obj["cli_context"] = cli_context
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


@cli.command()
@click.argument("symbols_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--boost",
    is_flag=True,
    help="Rank these symbols above others (e.g. recently opened files)",
)
@click.pass_context
def index(ctx: click.Context, symbols_file: str, boost: bool):
    """Index a JSON-lines symbol dump.

    Entries previously indexed for the files named in the dump are replaced.
    """
    cli_context: CLIContext = ctx.obj["cli_context"]
    symbols = load_symbols(symbols_file)
    files = list(dict.fromkeys(symbol.file for symbol in symbols))

    async def run() -> None:
        async with cli_context.open_service() as service:
            await service.reindex(files, symbols, boost=boost)

    _run(ctx, run())
    if not ctx.obj["quiet"]:
        click.echo(f"Indexed {len(symbols)} symbols from {len(files)} files")


@cli.command()
@click.argument("files", nargs=-1, required=True)
@click.pass_context
def remove(ctx: click.Context, files: List[str]):
    """Remove the entries of FILES from the index."""
    cli_context: CLIContext = ctx.obj["cli_context"]

    async def run() -> int:
        async with cli_context.open_service() as service:
            deleted = await service.remove(files)
            await service.commit()
            return deleted

    deleted = _run(ctx, run())
    if not ctx.obj["quiet"]:
        click.echo(f"Removed {deleted} entries")


@cli.command()
@click.argument("query")
@click.option("--max", "max_results", type=int, help="Maximum results")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def classes(
    ctx: click.Context,
    query: str,
    max_results: Optional[int],
    output_format: str,
):
    """Search classes matching QUERY."""
    cli_context: CLIContext = ctx.obj["cli_context"]

    async def run() -> List[FqnIndex]:
        async with cli_context.open_service() as service:
            return await service.search_classes(query, max_results)

    _display_entries(_run(ctx, run()), output_format)


@cli.command()
@click.argument("terms", nargs=-1, required=True)
@click.option("--max", "max_results", type=int, help="Maximum results")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def search(
    ctx: click.Context,
    terms: List[str],
    max_results: Optional[int],
    output_format: str,
):
    """Search classes and methods matching any of TERMS."""
    cli_context: CLIContext = ctx.obj["cli_context"]

    async def run() -> List[FqnIndex]:
        async with cli_context.open_service() as service:
            return await service.search_classes_methods(terms, max_results)

    _display_entries(_run(ctx, run()), output_format)


@cli.command()
@click.pass_context
def stats(ctx: click.Context):
    """Show index statistics."""
    cli_context: CLIContext = ctx.obj["cli_context"]

    async def run() -> Dict[str, Any]:
        async with cli_context.open_service() as service:
            return await service.stats()

    for key, value in _run(ctx, run()).items():
        click.echo(f"{key}: {value}")


if __name__ == "__main__":
    cli()
