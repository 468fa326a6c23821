"""CLI entry point for Claude Launcher."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from . import __version__
from .errors import LauncherError


@click.group(invoke_without_command=True)
@click.option(
    "--history",
    "history_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Claude history file (defaults to ~/.claude/history.jsonl)",
)
@click.option(
    "--bookmarks",
    "bookmarks_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Bookmarks file (defaults to ~/.claude-launcher/bookmarks.json)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx, history_path: Path | None, bookmarks_path: Path | None, verbose: bool):
    """Claude Launcher - browse and relaunch Claude Code sessions.

    Sessions are read from Claude Code's prompt history and reopened inside a
    tmux session per project, or in a plain terminal window without tmux.

    Usage:
        claude-launcher                 Start the interactive picker
        claude-launcher list -q api     List sessions matching "api"
        claude-launcher resume <id>     Resume a session without the picker
    """
    from .logging import setup_logging

    setup_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["history_path"] = history_path
    ctx.obj["bookmarks_path"] = bookmarks_path

    if ctx.invoked_subcommand is None:
        _run_picker(history_path, bookmarks_path)


def _make_state(history_path: Path | None, bookmarks_path: Path | None):
    from .bookmarks import BookmarkStore
    from .state import AppState

    return AppState(
        history_path=history_path,
        bookmark_store=BookmarkStore(bookmarks_path),
    )


def _make_orchestrator():
    from .spawner import LaunchOrchestrator, TempFileRegistry

    temp_files = TempFileRegistry()
    temp_files.install_exit_hooks()
    return LaunchOrchestrator(temp_files=temp_files)


def _run_picker(history_path: Path | None, bookmarks_path: Path | None) -> None:
    """Run the interactive picker."""
    if not sys.stdin.isatty():
        click.echo("Error: This command must be run in an interactive terminal.", err=True)
        click.echo("Run it directly in your terminal, not piped or in a script.", err=True)
        raise SystemExit(1)

    from .tui.app import run_app

    result = run_app(
        state=_make_state(history_path, bookmarks_path),
        orchestrator=_make_orchestrator(),
    )
    if result is not None:
        click.echo(result.description)


def _find_session(ctx, session_id: str):
    from .discovery import load_sessions

    for session in load_sessions(ctx.obj["history_path"]):
        if session.id == session_id:
            return session
    click.echo(f"Error: Session not found: {session_id}", err=True)
    raise SystemExit(1)


def _report(launch) -> None:
    """Run a launch callable, echoing its result or failing with exit code 1."""
    try:
        result = launch()
    except LauncherError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)
    if result.degraded:
        click.echo(f"Warning: {result.description}", err=True)
    else:
        click.echo(result.description)


@main.command(name="list")
@click.option("-q", "--query", default="", help="Fuzzy filter")
@click.option("-n", "--limit", default=20, help="Maximum sessions to display")
@click.pass_context
def list_sessions(ctx, query: str, limit: int):
    """List past sessions, bookmarks first, newest first."""
    from .discovery import format_relative_time

    state = _make_state(ctx.obj["history_path"], ctx.obj["bookmarks_path"])
    state.reload()
    if state.error:
        click.echo(state.error, err=True)
        raise SystemExit(1)

    state.set_query(query)
    shown = state.results[:limit]
    if not shown:
        click.echo("No sessions found.")
        return

    for s in shown:
        marker = "*" if state.bookmark_for(s.id) else " "
        age = format_relative_time(s.last_active)
        message = " ".join(s.last_message.split())[:50]
        click.echo(f"{marker} {s.id}  {s.project_name[:20]:20}  {age:>9}  {message}")


@main.command()
@click.argument("session_id")
@click.option("--direct", is_flag=True, help="Open a plain terminal instead of tmux")
@click.pass_context
def resume(ctx, session_id: str, direct: bool):
    """Resume SESSION_ID in its project."""
    session = _find_session(ctx, session_id)
    orchestrator = _make_orchestrator()
    if direct:
        _report(lambda: orchestrator.launch_resume_direct(session.id, session.project))
    else:
        _report(lambda: orchestrator.launch_resume(session.id, session.project))


@main.command()
@click.argument("session_id")
@click.pass_context
def fork(ctx, session_id: str):
    """Start a new session primed with a summary of SESSION_ID."""
    from .fork import extract_context

    session = _find_session(ctx, session_id)
    orchestrator = _make_orchestrator()
    _report(
        lambda: orchestrator.launch_with_context(session.project, extract_context(session))
    )


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
def fresh(path: str):
    """Start a fresh session in PATH (defaults to the current directory)."""
    orchestrator = _make_orchestrator()
    _report(lambda: orchestrator.launch_fresh(os.path.abspath(path)))


@main.command()
def tmux():
    """List live tmux sessions."""
    from .spawner import TmuxManager

    manager = TmuxManager()
    if not manager.exists():
        click.echo("tmux is not installed.", err=True)
        raise SystemExit(1)

    sessions = manager.list_sessions()
    if not sessions:
        click.echo("No tmux sessions.")
        return
    for s in sessions:
        state = "attached" if s.attached else "detached"
        click.echo(f"  {s.name:30}  {s.windows} windows  {state:8}  {s.created:%Y-%m-%d %H:%M}")


if __name__ == "__main__":
    main()
