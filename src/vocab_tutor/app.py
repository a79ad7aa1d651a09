"""Interactive CLI application."""
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from vocab_tutor.answers import (
    AnswerResult, apply_session_results, check_answer, check_scramble_answer, session_score,
)
from vocab_tutor.library import DEFAULT_LIBRARY_PATH, load_tables, save_tables
from vocab_tutor.models import StudyMode
from vocab_tutor.scoring import priority_score, success_rate
from vocab_tutor.scramble import generate_scramble_session
from vocab_tutor.selection import collect_source_rows
from vocab_tutor.session import generate_study_session, regenerate_question_for_row
from vocab_tutor.settings import default_scramble_settings, default_study_settings, load_settings

console = Console()
logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("q", "menu")
REGENERATE_COMMAND = "regen"


class SessionExitRequested(Exception):
    """Raised when the user leaves a session before it is finished."""


def session_prompt(prompt: str, choices: list | None = None, **kwargs) -> str:
    if choices is not None:
        choices = list(choices) + list(EXIT_COMMANDS)
    answer = Prompt.ask(prompt, choices=choices, **kwargs)
    if answer.strip().lower() in EXIT_COMMANDS:
        raise SessionExitRequested()
    return answer


def setup_logging() -> None:
    level = os.environ.get("VOCAB_TUTOR_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]Vocabulary Tutor[/bold]\n[dim]Quizzes and sentence scrambles from your word tables[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("study", "Quiz session"),
        ("scramble", "Sentence scramble"),
        ("tables", "Table overview"),
        ("words", "Words ranked by priority"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def ask_question(question) -> str:
    """Show one question and return the user's answer in checkable form."""
    title = " / ".join(n for n in question.question_source_column_names if n) or question.type.value
    console.print(Panel(question.question_text, title=f"{title} [dim]({question.type.value})[/dim]", border_style="cyan"))

    if question.type == StudyMode.MULTIPLE_CHOICE:
        for i, option in enumerate(question.options, 1):
            console.print(f"  [cyan]{i})[/cyan] {option}")
        numbers = [str(i) for i in range(1, len(question.options) + 1)]
        answer = session_prompt("\nYour answer", choices=numbers + [REGENERATE_COMMAND])
        if answer == REGENERATE_COMMAND:
            return answer
        return question.options[int(answer) - 1]

    if question.type == StudyMode.TRUE_FALSE:
        console.print(f"  Proposed answer: [bold]{question.proposed_answer}[/bold]")
        return session_prompt("\nIs that right?", choices=["True", "False", REGENERATE_COMMAND])

    return session_prompt("\nYour answer")


def run_study_session(tables: list, settings) -> tuple[list, set]:
    """Quiz the user. Returns the answer results and the rows left unanswered on quit."""
    questions = generate_study_session(tables, settings)
    if not questions:
        console.print("[yellow]Could not generate any questions.[/yellow]")
        return [], set()

    all_rows = collect_source_rows(tables, settings.sources)
    results = []
    console.print(f"\n[bold]Study Session[/bold] — {len(questions)} questions "
                  f"[dim](type '{REGENERATE_COMMAND}' for another question, 'q' to stop)[/dim]\n")
    for i, question in enumerate(questions):
        try:
            answer = ask_question(question)
            while answer == REGENERATE_COMMAND:
                question = regenerate_question_for_row(question, all_rows, tables, settings)
                answer = ask_question(question)
        except SessionExitRequested:
            remaining = {q.row_id for q in questions[i:]}
            return results, remaining

        is_correct = check_answer(question, answer)
        results.append(AnswerResult(row_id=question.row_id, is_correct=is_correct))
        if is_correct:
            console.print("[green]Correct![/green]\n")
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{question.correct_answer}[/green]\n")

    console.print(f"[bold]Score: {sum(r.is_correct for r in results)}/{len(results)} "
                  f"({session_score(results):.0f}%)[/bold]\n")
    return results, set()


def pick_scramble_parts(parts: list) -> str:
    """Build the sentence by picking parts from the bank one at a time."""
    bank = list(parts)
    picked = []
    while bank:
        for i, part in enumerate(bank, 1):
            console.print(f"  [cyan]{i})[/cyan] {part}")
        choice = session_prompt("Next word", choices=[str(i) for i in range(1, len(bank) + 1)])
        picked.append(bank.pop(int(choice) - 1))
        console.print(f"  [bold]{' '.join(picked)}[/bold]")
    return " ".join(picked)


def run_scramble_session(tables: list, settings) -> tuple[list, set]:
    questions = generate_scramble_session(tables, settings)
    if not questions:
        console.print("[yellow]No sentences found for scramble.[/yellow]")
        return [], set()

    results = []
    console.print(f"\n[bold]Sentence Scramble[/bold] — {len(questions)} sentences\n")
    for i, question in enumerate(questions):
        console.print(Panel("  ".join(question.scrambled_parts), title=f"Sentence {i + 1}/{len(questions)}", border_style="cyan"))
        try:
            if settings.interaction_mode == "typing":
                answer = session_prompt("Put the words in order")
            else:
                answer = pick_scramble_parts(question.scrambled_parts)
        except SessionExitRequested:
            return results, {q.row_id for q in questions[i:]}
        is_correct = check_scramble_answer(question, answer)
        results.append(AnswerResult(row_id=question.row_id, is_correct=is_correct))
        if is_correct:
            console.print("[green]Correct![/green]\n")
        else:
            console.print(f"[red]Not quite.[/red] [green]{question.original_sentence}[/green]\n")
    return results, set()


def finish_session(library_path: str, tables: list, results: list, quit_row_ids: set) -> None:
    updated = apply_session_results(tables, results, quit_row_ids)
    if updated:
        save_tables(library_path, tables)
        console.print(f"[dim]Updated stats for {updated} words.[/dim]")


def cmd_study(library_path: str, tables: list, settings_path: str | None):
    settings = None
    if settings_path:
        settings = load_settings(settings_path).get("study")
    if settings is None:
        settings = default_study_settings(tables)
    results, quit_rows = run_study_session(tables, settings)
    finish_session(library_path, tables, results, quit_rows)


def cmd_scramble(library_path: str, tables: list, settings_path: str | None):
    settings = None
    if settings_path:
        settings = load_settings(settings_path).get("scramble")
    if settings is None:
        settings = default_scramble_settings(tables)
    results, quit_rows = run_scramble_session(tables, settings)
    finish_session(library_path, tables, results, quit_rows)


def cmd_tables(tables: list):
    table = Table(title="Tables")
    table.add_column("Table", style="cyan")
    table.add_column("Words", justify="right")
    table.add_column("Relations")
    table.add_column("Avg Priority", justify="right")
    for t in tables:
        avg = sum(priority_score(r) for r in t.rows) / len(t.rows) if t.rows else 0
        table.add_row(t.name or t.id, str(len(t.rows)), ", ".join(r.name for r in t.relations), f"{avg:.0f}")
    console.print(table)


def cmd_words(tables: list):
    if not tables:
        console.print("[yellow]No tables loaded.[/yellow]")
        return
    for i, t in enumerate(tables, 1):
        console.print(f"  [cyan]{i}[/cyan]) {t.name or t.id}")
    choice = Prompt.ask("Select table", choices=[str(i) for i in range(1, len(tables) + 1)])
    selected = tables[int(choice) - 1]
    first_column = selected.columns[0].id if selected.columns else None

    ranked = sorted(selected.rows, key=priority_score, reverse=True)
    table = Table(title=f"{selected.name or selected.id}: words by priority")
    table.add_column("Word")
    table.add_column("Priority", justify="right")
    table.add_column("Success", justify="right")
    table.add_column("Seen", justify="right")
    for row in ranked:
        word = row.cols.get(first_column, "") if first_column else row.id
        table.add_row(word or row.id, str(priority_score(row)), f"{success_rate(row)}%", str(row.stats.encounters))
    console.print(table)


def main():
    setup_logging()
    args = sys.argv[1:]
    library_path = args[0] if args else DEFAULT_LIBRARY_PATH
    settings_path = args[1] if len(args) > 1 else None

    if not Path(library_path).exists():
        console.print(f"[red]Library not found: {library_path}[/red]")
        sys.exit(1)
    tables = load_tables(library_path)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="study").strip().lower()
        try:
            if choice == "study":
                cmd_study(library_path, tables, settings_path)
            elif choice == "scramble":
                cmd_scramble(library_path, tables, settings_path)
            elif choice == "tables":
                cmd_tables(tables)
            elif choice == "words":
                cmd_words(tables)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Happy studying![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
