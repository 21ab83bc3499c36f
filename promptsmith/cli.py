import os
from pathlib import Path
from typing import Dict, Optional

import typer
from dotenv import load_dotenv
from rich import print
from rich.markup import escape
from rich.table import Table

from .analysis import AnalysisResult, analyze_prompt
from .artifacts import save_confirmed, save_json_error, save_run
from .assembly import build_raw_text
from .llm import InvalidModelJSON
from .prompts import DEFAULT_MODEL, MODEL_IDS
from .schema import WIZARD_QUESTIONS
from .session import EditSession, SessionStateError

app = typer.Typer()

RUNS_DIR = "runs"

EDIT_HELP = """[bold]Commands[/bold]
  show                 list the current parts
  set <key> <text>     replace the text of a part
  pick <key> <n>       use suggestion number n for a part
  suggest <key>        show or hide the suggestions for a part
  reset                discard edits and go back to the last analysis
  analyze <text>       analyze new prompt text (discards edits)
  assemble             compose and save the final prompt
  exit                 leave the session"""

MODEL_OPTION = typer.Option(
    None,
    "--model",
    help=f"Classifier model: {', '.join(MODEL_IDS)} (default from PROMPTSMITH_MODEL).",
)
OFFLINE_OPTION = typer.Option(False, "--offline", help="Skip the remote classifier and use the heuristic only.")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Promptsmith CLI entrypoint."""
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit(code=0)


def _resolve_model(model: Optional[str]) -> str:
    resolved = model or os.getenv("PROMPTSMITH_MODEL") or DEFAULT_MODEL
    if resolved not in MODEL_IDS:
        print(f"[yellow]Unknown model '{escape(resolved)}'; the classifier will use its default.[/yellow]")
    return resolved


def _read_api_key(offline: bool) -> Optional[str]:
    if offline:
        return None
    load_dotenv()
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        print("[yellow]ANTHROPIC_API_KEY not found; using heuristic analysis.[/yellow]")
    return api_key


def _read_file(file: Path) -> str:
    if not file.exists():
        print("[red]File not found[/red]")
        raise typer.Exit(code=1)
    return file.read_text(encoding="utf-8")


def _report_error(result: AnalysisResult) -> None:
    exc = result.error
    if exc is None:
        return
    if isinstance(exc, InvalidModelJSON):
        error_path = save_json_error(exc.raw_text, exc.error, exc.kind, runs_dir=RUNS_DIR)
        print(
            f"[yellow]Classifier returned unusable output; using heuristic.[/yellow] "
            f"Saved error artifact to [bold]{error_path}[/bold]."
        )
    else:
        print(f"[yellow]Classifier request failed; using heuristic:[/yellow] {escape(str(exc))}")


def _run_analysis(session: EditSession, raw_text: str, model: str, api_key: Optional[str]) -> AnalysisResult:
    request_id = session.begin_analysis()
    result = analyze_prompt(raw_text, model, api_key=api_key, offline=api_key is None)
    _report_error(result)
    session.on_new_decomposition(result.decomposition, request_id=request_id)
    paths = save_run(raw_text, result.decomposition, runs_dir=RUNS_DIR)
    print(f"Saved decomposition to [bold]{paths['decomposition_path']}[/bold]")
    return result


def _print_parts(session: EditSession) -> None:
    table = Table(title=f"Prompt parts ({session.state.value})")
    table.add_column("key")
    table.add_column("label")
    table.add_column("text")
    for part in session.parts:
        table.add_row(part.key, part.label, escape(part.text) or "[dim]-[/dim]")
    print(table)
    if session.hint:
        print(f"[bold]Hint:[/bold] {escape(session.hint)}")


def _print_suggestions(session: EditSession, key: str) -> None:
    part = next(part for part in session.parts if part.key == key)
    for index, suggestion in enumerate(part.suggestions, 1):
        print(f"  {index}. {escape(suggestion)}")


def _handle_command(session: EditSession, line: str, model: str, api_key: Optional[str]) -> None:
    command, _, rest = line.partition(" ")
    command = command.lower()
    rest = rest.strip()

    if command == "show":
        _print_parts(session)
    elif command == "set":
        key, _, text = rest.partition(" ")
        session.set_part_text(key, text.strip())
        print(f"Updated {key}.")
    elif command == "pick":
        key, _, number = rest.partition(" ")
        if not number.strip().isdigit():
            raise ValueError("usage: pick <key> <n>")
        value = session.pick_suggestion(key, int(number) - 1)
        print(f"{key} -> {escape(value)}")
    elif command == "suggest":
        if session.toggle_suggestions(rest) is not None:
            _print_suggestions(session, rest)
    elif command == "reset":
        session.reset()
        _print_parts(session)
    elif command == "analyze":
        _run_analysis(session, rest, model, api_key)
        _print_parts(session)
    elif command == "assemble":
        final = session.confirm()
        print("[bold]Final prompt[/bold]")
        print(escape(final) if final else "[dim](empty)[/dim]")
        paths = save_confirmed(final, session.parts, runs_dir=RUNS_DIR)
        print(f"Saved prompt to [bold]{paths['confirmed_path']}[/bold]")
    else:
        print(EDIT_HELP)


def _edit_loop(session: EditSession, model: str, api_key: Optional[str]) -> None:
    _print_parts(session)
    print("[bold]Edit the parts. Type 'help' for commands, 'exit' to quit.[/bold]")

    while True:
        try:
            line = input("compose> ").strip()
        except EOFError:
            break
        if line.lower() in {"exit", "quit"}:
            print("Exiting compose session.")
            break
        if not line:
            continue
        try:
            _handle_command(session, line, model, api_key)
        except (SessionStateError, ValueError) as exc:
            print(f"[red]{escape(str(exc))}[/red]")


def _ask_wizard() -> Dict[str, str]:
    answers: Dict[str, str] = {}
    for question in WIZARD_QUESTIONS:
        print(f"[bold]{question.question}[/bold]")
        for index, suggestion in enumerate(question.suggestions, 1):
            print(f"  {index}. {escape(suggestion)}")
        try:
            answer = input("> ").strip()
        except EOFError:
            break
        if answer.isdigit() and 1 <= int(answer) <= len(question.suggestions):
            answer = question.suggestions[int(answer) - 1]
        if answer:
            answers[question.key] = answer
    return answers


@app.command()
def analyze(file: Path, model: Optional[str] = MODEL_OPTION, offline: bool = OFFLINE_OPTION):
    """Decompose a prompt file and print its parts."""
    content = _read_file(file)
    resolved_model = _resolve_model(model)
    api_key = _read_api_key(offline)

    session = EditSession()
    result = _run_analysis(session, content, resolved_model, api_key)
    print(f"source: {result.decomposition.source}")
    _print_parts(session)


@app.command()
def compose(file: Path, model: Optional[str] = MODEL_OPTION, offline: bool = OFFLINE_OPTION):
    """Decompose a prompt file, then edit its parts interactively."""
    content = _read_file(file)
    resolved_model = _resolve_model(model)
    api_key = _read_api_key(offline)

    session = EditSession()
    _run_analysis(session, content, resolved_model, api_key)
    _edit_loop(session, resolved_model, api_key)


@app.command()
def wizard(model: Optional[str] = MODEL_OPTION, offline: bool = OFFLINE_OPTION):
    """Build a prompt from guided questions, then edit its parts."""
    resolved_model = _resolve_model(model)
    api_key = _read_api_key(offline)

    answers = _ask_wizard()
    raw_text = build_raw_text(answers)
    print("[bold]Built prompt[/bold]")
    print(escape(raw_text) if raw_text else "[dim](empty)[/dim]")

    session = EditSession()
    _run_analysis(session, raw_text, resolved_model, api_key)
    _edit_loop(session, resolved_model, api_key)


if __name__ == "__main__":
    app()
