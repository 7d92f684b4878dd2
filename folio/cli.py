"""CLI entrypoints for Folio content tooling."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from .config import Config, load_config
from .index import build_index, write_index
from .ingest import CollectionResult, load_collection
from .issues import IssueSeverity, ValidationIssue
from .reporting import assemble_report, write_report
from .scaffold import ScaffoldError, ScaffoldResult, normalize_slug, scaffold_record
from .validation import sort_issues

console = Console()
app = typer.Typer(help="Folio front-matter content toolkit.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]
ForceFlag = Annotated[
    bool,
    typer.Option("--force", "-f", help="Overwrite existing files if they already exist."),
]


@app.command()
def new(
    slug: Annotated[
        str,
        typer.Argument(..., help="Slug identifier used for the document directory."),
    ],
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Override the default title derived from the slug."),
    ] = None,
    author: Annotated[
        str | None,
        typer.Option("--author", "-a", help="Author name; defaults to default_author from config."),
    ] = None,
    config_path: ConfigPathOption = "folio.yml",
    force: ForceFlag = False,
) -> None:
    """Create a new document directory with starter front matter."""
    try:
        normalized_slug = normalize_slug(slug)
    except ScaffoldError as exc:
        console.print(f"[bold red]Cannot scaffold[/]: {exc}")
        raise typer.Exit(code=1) from exc

    config = _load(config_path)

    try:
        result = scaffold_record(config, normalized_slug, title=title, author=author, force=force)
    except ScaffoldError as exc:
        console.print(f"[bold red]Cannot scaffold[/]: {exc}")
        raise typer.Exit(code=1) from exc

    if normalized_slug != slug:
        console.print(f"[bold yellow]Note[/]: slug normalized to '{normalized_slug}'.")

    _print_scaffold_summary(normalized_slug, result)


@app.command()
def lint(
    config_path: ConfigPathOption = "folio.yml",
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat warnings as errors."),
    ] = False,
) -> None:
    """Parse every document and report metadata, alias, and asset problems."""
    config = _load(config_path)
    result = load_collection(config)

    if not result.issues:
        console.print(
            f"[bold green]Lint clean[/]: {len(result.records)} document(s), no issues detected."
        )
        raise typer.Exit()

    _print_issues(result)
    console.print(
        f"[bold blue]Summary[/]: {result.error_count} error(s), {result.warning_count} warning(s) "
        f"across {result.document_count} document(s)."
    )

    raise typer.Exit(code=1 if result.is_fatal(strict=strict) else 0)


@app.command()
def index(
    config_path: ConfigPathOption = "folio.yml",
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Override the output directory from config."),
    ] = None,
) -> None:
    """Write the derived index and a collection report for renderers."""
    config = _load(config_path)
    output_dir = Path(output) if output else config.output_dir

    result = load_collection(config)
    collection_index = build_index(result.records)
    index_path = write_index(collection_index, output_dir)
    report = assemble_report(project=config.project_name, result=result, index=collection_index)
    report_path = write_report(report, output_dir)

    if result.issues:
        _print_issues(result)
    console.print(
        f"[bold green]Indexed[/]: {collection_index.total_items} record(s) -> {index_path}"
    )
    console.print(f"[bold green]Report written[/]: {report_path}")
    raise typer.Exit(code=1 if result.error_count > 0 else 0)


def _print_issues(result: CollectionResult) -> None:
    for issue in sort_issues(result.issues):
        console.print(_format_issue(issue))


def _format_issue(issue: ValidationIssue) -> str:
    style = "red" if issue.severity is IssueSeverity.ERROR else "yellow"
    location = escape(", ".join(issue.sources))
    if issue.pointer:
        location = f"{location} :: {escape(issue.pointer)}"
    return f"[bold {style}]{issue.severity.name}[/] {issue.kind.value} {location} - {escape(issue.message)}"


def _print_scaffold_summary(slug: str, result: ScaffoldResult) -> None:
    console.print(f"[bold green]Scaffolded[/]: {slug}")
    for path in result.created:
        console.print(f"  [green]created[/] {path}")
    for path in result.updated:
        console.print(f"  [yellow]overwrote[/] {path}")
    for note in result.notes:
        console.print(f"  [blue]note[/] {note}")


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
