# ABOUTME: The `lexepub stats` command for word and character totals.
# ABOUTME: Shows title, author, and counts for one or more EPUB files.

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lexepub.cli.options import settings_option
from lexepub.config import ExtractorSettings
from lexepub.core.document import EpubDocument
from lexepub.errors import LexEpubError

console = Console()


def _summarize(path: Path, doc: EpubDocument) -> dict[str, object]:
    """Plain-data summary of a processed document."""
    return {
        "path": str(path),
        "title": doc.title,
        "author": doc.author,
        "words": doc.word_count,
        "characters": doc.char_count,
        "documents": len(doc.chapters),
        "skipped": len(doc.skipped),
    }


def _or_unknown(value: object) -> str:
    return escape(str(value)) if value else "[dim]unknown[/dim]"


def _render(summary: dict[str, object]) -> Table:
    name = Path(str(summary["path"])).name
    table = Table(title=escape(name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", _or_unknown(summary["title"]))
    table.add_row("Author", _or_unknown(summary["author"]))
    table.add_row("Words", str(summary["words"]))
    table.add_row("Characters", str(summary["characters"]))
    table.add_row("Documents", str(summary["documents"]))
    if summary["skipped"]:
        table.add_row("Skipped", f"[yellow]{summary['skipped']}[/yellow]")
    return table


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print results as JSON.")
@settings_option
def stats(paths: tuple[Path, ...], as_json: bool, settings: ExtractorSettings) -> None:
    """Count words and characters in EPUB files."""
    results: list[dict[str, object]] = []
    failures = 0

    for path in paths:
        try:
            with EpubDocument.open(path, settings) as doc:
                summary = _summarize(path, doc)
        except LexEpubError as exc:
            failures += 1
            if as_json:
                results.append({"path": str(path), "error": str(exc)})
            else:
                console.print(f"[red]Error:[/red] {escape(str(exc))}")
            continue

        if as_json:
            results.append(summary)
        else:
            console.print(_render(summary))

    if as_json:
        click.echo(json.dumps(results, indent=2, ensure_ascii=False))

    if failures:
        raise SystemExit(1)
