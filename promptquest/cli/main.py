"""
Typer CLI for the PromptQuest question bank.

Commands:
    promptquest import FILE           - Import a question bank document
    promptquest import FILE --clear   - Replace the bank with the document
    promptquest import-default        - Import the configured default document
    promptquest clear                 - Delete every question
    promptquest stats                 - Show question bank statistics
    promptquest sample -n 5           - Draw random questions
    promptquest score 1=A 2=C         - Score answers
    promptquest serve                 - Run the HTTP API
    promptquest config                - Show effective configuration

Usage:
    promptquest --help
    promptquest import input/questions.json --clear
    promptquest sample -n 10 --skill python --difficulty 3
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from config import get_settings
from promptquest import __version__
from promptquest.core.errors import QuizBankError
from promptquest.core.logging import configure_logging
from promptquest.store import QuestionFilters

app = typer.Typer(
    help="PromptQuest CLI: JSON question bank -> SQLite/BigQuery -> quizzes",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Question bank import, sampling and scoring."""
    configure_logging(get_settings(), level="DEBUG" if verbose else None)


def _build_bank():
    """Build the QuizBank for the configured backend."""
    from promptquest.services import QuizBank

    try:
        return QuizBank.from_settings(get_settings())
    except QuizBankError as exc:
        rprint(f"[red]✗[/red] Storage backend unavailable: {exc}")
        raise typer.Exit(code=1)


def _fail(action: str, exc: Exception) -> None:
    rprint(f"\n[red]✗[/red] {action} failed: {exc}")
    committed = getattr(exc, "committed_count", 0)
    if committed:
        rprint(f"[yellow]⚠[/yellow] {committed} questions were written before the failure.")
        rprint("  Re-run with [cyan]--clear[/cyan] to restore a consistent bank.")
    raise typer.Exit(code=1)


# ========================================
# IMPORT COMMANDS
# ========================================


@app.command("import")
def import_questions(
    path: Path = typer.Argument(..., help="Question bank JSON file"),
    clear: bool = typer.Option(False, "--clear", help="Delete existing questions first"),
) -> None:
    """
    Import questions from a JSON document.

    The document must hold a top-level "questions" array. Options missing
    from a record's option list are stored as empty strings.

    Examples:
        promptquest import input/promptquest-questions-test.json
        promptquest import input/new-bank.json --clear
    """
    bank = _build_bank()
    rprint(f"[yellow]Importing questions from {path}...[/yellow]")

    try:
        imported = bank.import_file(path, clear_first=clear)
    except QuizBankError as exc:
        _fail("Import", exc)

    rprint(f"[green]✓[/green] Imported {imported} questions")
    logger.info("Import completed successfully!")


@app.command("import-default")
def import_default() -> None:
    """Import the configured default question bank (existing questions kept)."""
    bank = _build_bank()
    try:
        imported = bank.import_default()
    except QuizBankError as exc:
        _fail("Import", exc)

    rprint(f"[green]✓[/green] Imported {imported} questions from {bank.settings.json_file_path}")


@app.command("clear")
def clear_questions(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete every question from the active store."""
    if not yes:
        typer.confirm("Delete ALL questions?", abort=True)

    bank = _build_bank()
    try:
        bank.clear_all()
    except QuizBankError as exc:
        _fail("Clear", exc)

    rprint("[green]✓[/green] All questions cleared")


# ========================================
# QUIZ COMMANDS
# ========================================


@app.command("stats")
def show_stats() -> None:
    """Show question bank statistics."""
    bank = _build_bank()
    try:
        stats = bank.stats()
    except QuizBankError as exc:
        _fail("Statistics", exc)

    table = Table(title="Question Bank", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total questions", str(stats.total_questions))
    table.add_row("Skills", ", ".join(stats.skills) or "-")
    table.add_row("Areas", ", ".join(stats.areas) or "-")
    table.add_row("Degrees", ", ".join(stats.degrees) or "-")
    console.print(table)

    dist_table = Table(title="Difficulty Distribution")
    dist_table.add_column("Difficulty", justify="center")
    dist_table.add_column("Questions", justify="right")
    for level, count in stats.difficulty_distribution.items():
        dist_table.add_row(str(level), str(count))
    console.print(dist_table)


@app.command("sample")
def sample_questions(
    limit: int = typer.Option(5, "--limit", "-n", help="Number of questions"),
    skill: str | None = typer.Option(None, "--skill", help="Skill filter"),
    area: str | None = typer.Option(None, "--area", help="Area filter"),
    difficulty: int | None = typer.Option(None, "--difficulty", min=1, max=5, help="Exact difficulty"),
    degree: str | None = typer.Option(None, "--degree", help="junior, mid or senior"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Draw random questions matching every given filter."""
    bank = _build_bank()
    filters = QuestionFilters(skill=skill, area=area, difficulty=difficulty, degree=degree)
    try:
        questions = bank.sample(limit, filters)
    except QuizBankError as exc:
        _fail("Sampling", exc)

    if as_json:
        typer.echo(json.dumps([q.to_dict(include_answer=False) for q in questions], indent=2))
        return

    if not questions:
        rprint("[yellow]No questions match the given filters[/yellow]")
        return

    table = Table(title=f"Random Questions ({len(questions)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Question")
    table.add_column("Skill", style="cyan")
    table.add_column("Diff", justify="center")
    table.add_column("Degree")
    for q in questions:
        table.add_row(str(q.id), q.text, q.skill or "", str(q.difficulty or ""), q.degree or "")
    console.print(table)


@app.command("score")
def score_answers(
    answers: list[str] = typer.Argument(None, help="Answers as ID=LETTER pairs, e.g. 1=A 2=C"),
    answers_file: Path | None = typer.Option(
        None, "--file", "-f", help='JSON file with {"<id>": "<letter>"}'
    ),
) -> None:
    """Score a set of answers against the stored correct answers."""
    sheet: dict[str, str | None] = {}
    if answers_file is not None:
        try:
            loaded = json.loads(answers_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:  # JSONDecodeError and UnicodeDecodeError are ValueErrors
            _fail("Reading answers", exc)
        if not isinstance(loaded, dict):
            rprint(f'[red]✗[/red] {answers_file} must hold a JSON object of {{"<id>": "<letter>"}}')
            raise typer.Exit(code=1)
        sheet.update({key: None if letter is None else str(letter) for key, letter in loaded.items()})
    for pair in answers or []:
        if "=" not in pair:
            rprint(f"[red]✗[/red] Invalid answer {pair!r}, expected ID=LETTER")
            raise typer.Exit(code=2)
        question_id, letter = pair.split("=", 1)
        sheet[question_id.strip()] = letter.strip()

    bank = _build_bank()
    try:
        result = bank.score(sheet)
    except QuizBankError as exc:
        _fail("Scoring", exc)

    table = Table(title="Results")
    table.add_column("ID", justify="right")
    table.add_column("Yours", justify="center")
    table.add_column("Correct", justify="center")
    table.add_column("")
    for item in result.results:
        mark = "[green]✓[/green]" if item.is_correct else "[red]✗[/red]"
        table.add_row(str(item.question.id), item.selected or "-", item.question.correct_answer, mark)
    console.print(table)

    if result.unresolved_ids:
        rprint(f"[yellow]⚠[/yellow] Unknown question ids: {', '.join(map(str, result.unresolved_ids))}")
    rprint(f"\n[bold]Score:[/bold] {result.correct}/{result.total} ({result.percentage:.1f}%)")


# ========================================
# SERVER / INFO COMMANDS
# ========================================


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind host (default: from config)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default: from config)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "promptquest.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


@app.command("config")
def show_config() -> None:
    """Show the effective configuration."""
    settings = get_settings()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Storage backend", settings.storage_backend)
    if settings.storage_backend == "relational":
        table.add_row("Database URL", settings.database_url)
    else:
        table.add_row("BigQuery table", settings.get_bigquery_table_id())
        table.add_row("BigQuery location", settings.bigquery_location or "(default)")
    table.add_row("Default JSON file", settings.json_file_path)
    table.add_row("Auto initialize", str(settings.auto_initialize))
    table.add_row("Clear on startup", str(settings.clear_on_startup))
    table.add_row("Count unknown ids in score", str(settings.score_count_unresolved))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    rprint(f"[bold]promptquest[/bold] v{__version__}")
    rprint("  JSON question bank -> SQLite/BigQuery -> quizzes")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
