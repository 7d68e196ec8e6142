"""Command-line interface for Scripture Store."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from scripture_store import __version__

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--bibles-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory of translation JSON files")
@click.option("--verbose", "-v", is_flag=True, help="Show load progress and skipped records")
@click.pass_context
def main(ctx: click.Context, bibles_dir: Path | None, verbose: bool) -> None:
    """Scripture Store - read and search scripture translations."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["bibles_dir"] = bibles_dir


def _load_store(ctx: click.Context):
    """Build and load a store from settings, honouring --bibles-dir."""
    from scripture_store.config import get_settings
    from scripture_store.store import ScriptureStore

    settings = get_settings()
    location = ctx.obj.get("bibles_dir") or settings.bibles_dir

    store = ScriptureStore(location)
    with console.status("Loading translations..."):
        store.load_all()
    return store


def _print_verses(verses) -> None:
    for v in verses:
        console.print(f"[bold cyan]{v.reference()}[/bold cyan]  {escape(v.text)}")


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configured paths and what loaded."""
    from scripture_store.config import get_settings

    settings = get_settings()
    store = _load_store(ctx)

    console.print("[bold]Scripture Store Status[/bold]\n")
    console.print(f"Bibles directory: {store.location}")
    console.print(f"Default translation: {settings.default_translation}")

    listed = store.list_translations()
    available = [m for m in listed if store.has_translation(m.code)]
    if available:
        console.print(f"[green]✓[/green] {len(available)} translation(s) loaded")
    else:
        console.print("[red]✗[/red] No translations loaded")

    failed = len(listed) - len(available)
    if failed:
        console.print(f"[yellow]![/yellow] {failed} translation(s) listed without text")


@main.command()
@click.pass_context
def translations(ctx: click.Context) -> None:
    """List available translations."""
    store = _load_store(ctx)

    listed = sorted(store.list_translations(), key=lambda m: m.code)
    if not listed:
        console.print("[yellow]No translations found[/yellow]")
        return

    table = Table(title="Translations")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Short")
    table.add_column("Year")
    table.add_column("Verses", style="green", justify="right")

    for meta in listed:
        table.add_row(
            meta.code,
            meta.name,
            meta.short_name,
            meta.year,
            f"{store.verse_count(meta.code):,}",
        )

    console.print(table)


@main.command()
@click.argument("code")
@click.pass_context
def books(ctx: click.Context, code: str) -> None:
    """List books of a translation in canonical order."""
    from scripture_store.canon import book_code, testament

    store = _load_store(ctx)

    table = Table(title=f"Books ({code.upper()})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Id", style="dim")
    table.add_column("Book", style="cyan")
    table.add_column("Testament")
    table.add_column("Chapters", justify="right")

    for i, book in enumerate(store.list_books(code), start=1):
        table.add_row(
            str(i),
            book_code(book),
            book,
            testament(book) or "",
            str(store.chapter_count(code, book)),
        )

    console.print(table)


@main.command()
@click.argument("code")
@click.argument("book")
@click.pass_context
def chapters(ctx: click.Context, code: str, book: str) -> None:
    """Show the chapters of a book."""
    from scripture_store.canon import resolve_book

    name = resolve_book(book)
    if name is None:
        console.print(f"[red]Unknown book:[/red] {book}")
        ctx.exit(1)

    store = _load_store(ctx)
    console.print(f"{name}: {store.chapter_count(code, name)} chapters")
    numbers = store.list_chapters(code, name)
    if numbers:
        console.print(", ".join(str(n) for n in numbers), style="dim")


@main.command()
@click.argument("code")
@click.argument("reference", nargs=-1, required=True)
@click.pass_context
def read(ctx: click.Context, code: str, reference: tuple[str, ...]) -> None:
    """Read a verse, range or chapter, e.g. `read kjv John 3:16-18`."""
    from scripture_store.reference import parse_reference

    ref_text = " ".join(reference)
    ref = parse_reference(ref_text)
    if ref is None:
        console.print(f"[red]Could not parse reference:[/red] {ref_text}")
        ctx.exit(1)

    store = _load_store(ctx)
    verses = store.get_passage(code, ref)
    if not verses:
        console.print(f"[yellow]No verses found for {ref} in {code.upper()}[/yellow]")
        return

    _print_verses(verses)


@main.command()
@click.argument("code")
@click.argument("query")
@click.option("--limit", "-n", type=int, default=None, help="Maximum number of results")
@click.pass_context
def search(ctx: click.Context, code: str, query: str, limit: int | None) -> None:
    """Search verse text (case-insensitive substring)."""
    from scripture_store.config import get_settings

    settings = get_settings()
    limit = settings.search_limit if limit is None else min(limit, settings.max_search_limit)

    store = _load_store(ctx)
    results = store.search(code, query, limit)

    console.print(f"[bold]Searching {code.upper()}:[/bold] {escape(query)}")
    if not results:
        console.print("[yellow]No matches[/yellow]")
        return

    _print_verses(results)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
