# ABOUTME: The `lexepub chapters` command for per-document counts.
# ABOUTME: Lists every spine item with its words and characters, plus skipped items.

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


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@settings_option
def chapters(path: Path, settings: ExtractorSettings) -> None:
    """Show word and character counts for each content document of an EPUB."""
    try:
        doc = EpubDocument.open(path, settings)
    except LexEpubError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    with doc:
        table = Table(title=escape(path.name))
        table.add_column("#", style="dim", justify="right")
        table.add_column("ID")
        table.add_column("Path")
        table.add_column("Words", justify="right")
        table.add_column("Chars", justify="right")

        for index, chapter in enumerate(doc.chapters, start=1):
            table.add_row(
                str(index),
                chapter.idref,
                chapter.path,
                str(chapter.word_count),
                str(chapter.char_count),
            )

        console.print(table)
        for item in doc.skipped:
            console.print(
                f"[yellow]Skipped[/yellow] {escape(item.idref)} "
                f"({escape(item.path)}): {escape(item.reason)}"
            )
        console.print(
            f"\n[dim]{len(doc.chapters)} document(s), "
            f"{doc.word_count} words, {doc.char_count} characters[/dim]"
        )
