"""CLI — thin typer adapter over SessionController. No business logic here."""
import asyncio
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from fastwhisper_client.config import Config
from fastwhisper_client.constants import (
    HIGHLIGHT_STYLE,
    HISTORY_PREVIEW_CHARS,
    MSG_BOOKMARKS,
    MSG_DELETED,
    MSG_ERR_NOT_FOUND,
    MSG_FILE_INFO,
    MSG_HISTORY_EMPTY,
    MSG_KEYWORDS,
    MSG_MATCHES,
    MSG_THANK_YOU,
    MSG_TRANSCRIBING,
    MSG_TRANSCRIPT_PLACEHOLDER,
    SUPPORTED_FORMATS,
)
from fastwhisper_client.errors import FastWhisperError
from fastwhisper_client.highlight import count_matches, find_matches
from fastwhisper_client.history_store import HistoryStore
from fastwhisper_client.session import SessionController
from fastwhisper_client.transcription.fastwhisper import FastWhisperTranscriptionClient
from fastwhisper_client.validator import Rejected, validate

app = typer.Typer(
    name="fastwhisper",
    help="FastWhisper — turn your voice into words, and keep what you said.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


# ── helpers ───────────────────────────────────────────────────────────────────


def _fail(message: str) -> None:
    err_console.print(Text(f"✗ {message}", style="bold red"))
    raise typer.Exit(code=1)


@contextmanager
def _user_errors() -> Iterator[None]:
    try:
        yield
    except FastWhisperError as exc:
        _fail(exc.user_message)


def _controller(ctx: typer.Context) -> SessionController:
    match ctx.obj:
        case Config() as config:
            pass
        case _:
            try:
                config = Config.from_env()
            except ValueError as exc:
                _fail(str(exc))
    store = HistoryStore(config.history_path)
    transcriber = FastWhisperTranscriptionClient(
        config.api_key, base_url=config.api_url, timeout=config.timeout
    )
    return SessionController(store, transcriber)


def _render(controller: SessionController) -> Text:
    state = controller.state
    match state.transcript:
        case "":
            return Text(MSG_TRANSCRIPT_PLACEHOLDER, style="dim italic")
        case transcript:
            text = Text(transcript)
            for start, end in find_matches(transcript, state.search_term):
                text.stylize(HIGHLIGHT_STYLE, start, end)
            return text


def _print_transcript(controller: SessionController) -> None:
    state = controller.state
    console.print(_render(controller))
    if state.search_term:
        console.print(MSG_MATCHES % (count_matches(state.transcript, state.search_term), state.search_term), markup=False)
    if state.bookmarks:
        console.print(MSG_BOOKMARKS % ", ".join(map(str, state.bookmarks)), markup=False)
    if state.keywords:
        console.print(MSG_KEYWORDS % ", ".join(state.keywords), markup=False)


def _export(controller: SessionController, directory: Path) -> None:
    path = controller.export(directory)
    console.print(f"Saved {path}", markup=False)
    console.print(MSG_THANK_YOU, style="green")


# ── commands ──────────────────────────────────────────────────────────────────


@app.command()
def transcribe(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Audio file to transcribe"),
    search: str = typer.Option("", "--search", "-s", help="Highlight this term in the result"),
    export: Optional[Path] = typer.Option(
        None, "--export", "-e", file_okay=False, help="Also write transcription.txt into this directory"
    ),
) -> None:
    """Upload an audio file and print its transcript."""
    controller = _controller(ctx)
    state = controller.state

    # Size and extension are known from the filesystem; don't read a file we'd reject.
    match validate(file.name, file.stat().st_size):
        case Rejected(reason=reason):
            _fail(reason)
        case _:
            pass

    controller.choose_file(file.name, file.read_bytes())
    match (state.pending, state.error):
        case (None, str() as message):
            _fail(message)
        case (pending, _):
            console.print(MSG_FILE_INFO % (pending.file_name, pending.size_mb), markup=False)

    with console.status(MSG_TRANSCRIBING):
        asyncio.run(controller.submit())

    match state.error:
        case str() as message:
            _fail(message)
        case None:
            pass

    controller.set_search_term(search)
    console.print(Text(f"id {state.selected.id}", style="dim"))
    _print_transcript(controller)
    if export is not None:
        with _user_errors():
            _export(controller, export)


@app.command()
def history(ctx: typer.Context) -> None:
    """List past transcriptions, most recent first."""
    records = _controller(ctx).store.all()
    match records:
        case []:
            console.print(MSG_HISTORY_EMPTY, markup=False)
            return
        case _:
            pass

    table = Table(title="History")
    table.add_column("ID", no_wrap=True)
    table.add_column("Created", no_wrap=True)
    table.add_column("Preview")
    table.add_column("Bookmarks", justify="right")
    table.add_column("Keywords")
    for r in records:
        table.add_row(
            r.id,
            r.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
            Text(r.text[:HISTORY_PREVIEW_CHARS]),
            str(len(r.bookmarks)),
            Text(", ".join(r.keywords)),
        )
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., metavar="ID"),
    search: str = typer.Option("", "--search", "-s", help="Highlight this term"),
) -> None:
    """Print one transcript with its bookmarks and keywords."""
    controller = _controller(ctx)
    with _user_errors():
        controller.select(record_id)
    controller.set_search_term(search)
    _print_transcript(controller)


@app.command()
def search(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., metavar="ID"),
    term: str = typer.Argument(..., help="Case-insensitive literal text"),
) -> None:
    """Highlight every occurrence of TERM in a transcript."""
    show(ctx, record_id=record_id, search=term)


@app.command()
def export(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., metavar="ID"),
    output: Path = typer.Option(Path("."), "--output", "-o", file_okay=False, help="Target directory"),
) -> None:
    """Write a transcript to transcription.txt."""
    controller = _controller(ctx)
    with _user_errors():
        controller.select(record_id)
        _export(controller, output)


@app.command()
def delete(ctx: typer.Context, record_id: str = typer.Argument(..., metavar="ID")) -> None:
    """Remove a transcript from history."""
    match _controller(ctx).delete(record_id):
        case True:
            console.print(MSG_DELETED % record_id, markup=False)
        case False:
            _fail(MSG_ERR_NOT_FOUND % record_id)


@app.command()
def bookmark(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., metavar="ID"),
    offset: int = typer.Argument(..., help="Character offset into the transcript"),
    remove: bool = typer.Option(False, "--remove", "-r", help="Remove instead of add"),
) -> None:
    """Add (or remove) a bookmark on a transcript."""
    controller = _controller(ctx)
    with _user_errors():
        controller.select(record_id)
        record = controller.remove_bookmark(offset) if remove else controller.add_bookmark(offset)
    console.print(MSG_BOOKMARKS % (", ".join(map(str, record.bookmarks)) or "-"), markup=False)


@app.command()
def keyword(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., metavar="ID"),
    word: str = typer.Argument(...),
    remove: bool = typer.Option(False, "--remove", "-r", help="Remove instead of add"),
) -> None:
    """Tag (or untag) a transcript with a keyword."""
    controller = _controller(ctx)
    with _user_errors():
        controller.select(record_id)
        record = controller.remove_keyword(word) if remove else controller.add_keyword(word)
    console.print(MSG_KEYWORDS % (", ".join(record.keywords) or "-"), markup=False)


@app.command()
def formats() -> None:
    """List the supported audio formats."""
    table = Table(title="Supported formats")
    table.add_column("Extension")
    table.add_column("Format")
    for ext, name in SUPPORTED_FORMATS.items():
        table.add_row(ext.upper(), name)
    console.print(table)
