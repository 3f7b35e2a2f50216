"""Command-line interface for catalog synchronization."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import SyncOptions, get_config
from .errors import ConfigError, FormatError
from .extraction.xcstrings_parser import XCStringsParser
from .models.translation_result import SyncStats
from .translation.translator import CatalogSynchronizer

console = Console()


def _setup_logging(verbose: bool) -> None:
    """Route package log records through rich so every step prints one line."""
    logger = logging.getLogger("xcsync")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.handlers.clear()
    logger.propagate = False
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def _load(input_path: str):
    try:
        return XCStringsParser().parse(input_path)
    except FormatError as e:
        console.print(f"[red]Invalid catalog:[/red] {e}")
        raise click.Abort()


@click.group()
@click.version_option(version=__version__)
def cli():
    """Fill in .xcstrings translations with a local language model."""
    pass


@cli.command()
@click.argument("xcstrings", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="Verbose output, including raw model replies.")
@click.option("--force", is_flag=True, help="Force retranslation of existing translations.")
@click.option("--all", "all_languages", is_flag=True, help="Translate into all known major languages.")
@click.option("--top", type=int, default=None, help="Translate into the top N major languages.")
@click.option("--explain", is_flag=True, help="Request an explanation for each translation.")
@click.option(
    "--retries",
    type=int,
    default=None,
    help="Attempts per translation before giving up (default: XCSYNC_RETRIES or 8).",
)
@click.option("--endpoint", default=None, help="The ollama generate URL to connect to.")
@click.option("--model", default=None, help="The ollama model to use (default: OLLAMA_MODEL).")
@click.option("--lang", "-l", "languages", multiple=True, help="Language code to translate (repeatable).")
@click.option(
    "--retranslate",
    multiple=True,
    metavar="STATE",
    help="Translation state to re-translate (repeatable).",
)
@click.option("--state", default=None, help="State for new translations (default: needs_review).")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for each model reply.")
def sync(
    xcstrings: Tuple[str, ...],
    verbose: bool,
    force: bool,
    all_languages: bool,
    top: Optional[int],
    explain: bool,
    retries: Optional[int],
    endpoint: Optional[str],
    model: Optional[str],
    languages: Tuple[str, ...],
    retranslate: Tuple[str, ...],
    state: Optional[str],
    timeout: Optional[float],
):
    """Translate missing terms of one or more .xcstrings files in place."""
    _setup_logging(verbose)

    try:
        options = SyncOptions.from_config(
            get_config(),
            model=model,
            endpoint=endpoint,
            verbose=verbose,
            force=force,
            all_languages=all_languages,
            top=top,
            languages=list(languages),
            explain=explain,
            retranslate=list(retranslate),
            state=state,
            retries=retries,
            timeout=timeout,
        )
        options.check()
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise click.Abort()

    synchronizer = CatalogSynchronizer(options)
    try:
        stats = synchronizer.sync_files(xcstrings)
    except (FormatError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()
    except OSError as e:
        console.print(f"[red]Could not read or write catalog:[/red] {e}")
        raise click.Abort()

    _print_summary(stats)


def _print_summary(stats: SyncStats):
    """Print run statistics."""
    panel_content = (
        f"[bold]Pairs:[/bold] {stats.total}\n"
        f"[green]Translated:[/green] {stats.accepted}\n"
        f"[dim]Skipped:[/dim] {stats.skipped}\n"
        f"[red]Failed:[/red] {stats.exhausted}\n"
        f"[dim]Model requests:[/dim] {stats.attempts}"
    )
    console.print(Panel(panel_content, title="Sync Summary"))


@cli.command()
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True),
    help="Path to .xcstrings file"
)
def stats(input_path: str):
    """Show statistics for an .xcstrings file."""
    xcstrings = _load(input_path)

    table = Table(title=f"Statistics for {Path(input_path).name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    total = len(xcstrings.strings)
    table.add_row("Total strings", str(total))
    table.add_row("Source language", xcstrings.source_language)

    languages = xcstrings.localized_languages()
    table.add_row("Languages", ", ".join(languages) or "None")

    for lang in languages:
        translated = sum(
            1 for entry in xcstrings.strings.values()
            if entry.has_translation(lang)
        )
        coverage = (translated / total) * 100 if total else 0
        table.add_row(f"  {lang} coverage", f"{translated}/{total} ({coverage:.1f}%)")

    console.print(table)


@cli.command()
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True),
    help="Path to .xcstrings file"
)
@click.option(
    "--language", "-l",
    required=True,
    help="Language code to show untranslated strings for"
)
@click.option(
    "--limit",
    type=int,
    default=20,
    help="Limit number of strings to show"
)
def untranslated(input_path: str, language: str, limit: int):
    """Show untranslated strings for a specific language."""
    xcstrings = _load(input_path)

    untranslated_keys = xcstrings.get_untranslated_keys(language)

    console.print(f"[cyan]Untranslated strings for {language}:[/cyan] {len(untranslated_keys)} total")

    if not untranslated_keys:
        console.print("[green]All strings are translated![/green]")
        return

    table = Table(show_header=True)
    table.add_column("Key", style="dim", max_width=40)
    table.add_column("Source Value", max_width=60)

    for key in untranslated_keys[:limit]:
        source = xcstrings.strings[key].get_source_value(xcstrings.source_language)
        table.add_row(key[:40], source[:60])

    console.print(table)

    if len(untranslated_keys) > limit:
        console.print(f"\n[dim]... and {len(untranslated_keys) - limit} more[/dim]")


if __name__ == "__main__":
    cli()
