"""
CLI entry point for fuzzyedit: tolerant search-and-replace for documents.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

try:
    from importlib.metadata import version as pkg_version

    _version = pkg_version("fuzzyedit")
except Exception:
    _version = "0.1.0"

from fuzzyedit.core.config import EditSettings, load_settings
from fuzzyedit.core.errors import EditSettingsError, PendingEditNotFoundError, StaleEditError
from fuzzyedit.core.pending import PendingEditStore

console = Console()
console_err = Console(stderr=True)


def _load_settings_or_exit(config_path: str | None) -> EditSettings:
    try:
        return load_settings(config_path)
    except EditSettingsError as e:
        console_err.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def _read_text_arg(text: str | None, file_path: str | None, name: str) -> str:
    """Resolve a --<name> / --<name>-file pair to a single string."""
    if text is not None and file_path is not None:
        console_err.print(f"[red]Error:[/red] Use either --{name} or --{name}-file, not both")
        sys.exit(1)
    if file_path is not None:
        if file_path == "-":
            return sys.stdin.read()
        return Path(file_path).read_text()
    if text is None:
        console_err.print(f"[red]Error:[/red] --{name} or --{name}-file is required")
        sys.exit(1)
    return text


def _print_diff(diff: str) -> None:
    if not diff:
        console.print("[dim]No changes[/dim]")
        return
    console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))


# =============================================================================
# Root CLI Group
# =============================================================================


@click.group()
@click.version_option(version=_version, prog_name="fuzzyedit")
@click.option("--debug", is_flag=True, hidden=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """
    Fuzzyedit: tolerant search-and-replace for documents.

    Finds the passage you meant even when whitespace, indentation or
    escaping drifted, and refuses to guess when the match is ambiguous.

    \b
        fuzzyedit apply FILE --old TEXT --new TEXT   # Propose an edit
        fuzzyedit pending list                        # Review proposals
        fuzzyedit pending accept ID                   # Apply a proposal
    """
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    if debug:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")


# =============================================================================
# Apply
# =============================================================================


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--old", "old_text", default=None, help="Text to replace")
@click.option("--old-file", type=click.Path(exists=True, allow_dash=True), default=None, help="Read text to replace from a file ('-' for stdin)")
@click.option("--new", "new_text", default=None, help="Replacement text")
@click.option("--new-file", type=click.Path(exists=True, allow_dash=True), default=None, help="Read replacement text from a file ('-' for stdin)")
@click.option("--replace-all", is_flag=True, help="Replace every occurrence")
@click.option(
    "--mode",
    type=click.Choice(["auto", "exact"]),
    default=None,
    help="Matching mode (default: from settings)",
)
@click.option("--write", "write_now", is_flag=True, help="Write the file instead of recording a pending edit")
@click.option("--config", "config_path", default=None, help="Settings file")
def apply(
    path: str,
    old_text: str | None,
    old_file: str | None,
    new_text: str | None,
    new_file: str | None,
    replace_all: bool,
    mode: str | None,
    write_now: bool,
    config_path: str | None,
):
    """
    Replace text in PATH.

    By default the change is recorded as a pending edit; use --write to
    apply it immediately.

    \b
    Examples:
        fuzzyedit apply notes.md --old "teh" --new "the"
        fuzzyedit apply main.py --old-file old.txt --new-file new.txt --write
        fuzzyedit apply README.md --old "v1" --new "v2" --replace-all
    """
    from fuzzyedit.tools.edit import EditDocumentInput, edit_document

    settings = _load_settings_or_exit(config_path)
    if old_file == "-" and new_file == "-":
        console_err.print("[red]Error:[/red] Only one of --old-file and --new-file can read stdin")
        sys.exit(1)
    old = _read_text_arg(old_text, old_file, "old")
    new = _read_text_arg(new_text, new_file, "new")

    result = edit_document(
        EditDocumentInput(
            path=path,
            old_text=old,
            new_text=new,
            replace_all=replace_all,
            mode=mode,
            review=not write_now,
        ),
        settings=settings,
    )

    if not result.ok:
        console_err.print(f"[red]Error:[/red] {result.error}")
        sys.exit(1)

    _print_diff(result.diff or "")
    console.print(f"[green]✓[/green] {result.output} [dim]({result.strategy})[/dim]")
    if result.pending_id:
        console.print(
            f"Pending edit [cyan]{result.pending_id}[/cyan] recorded. "
            f"Run [cyan]fuzzyedit pending accept {result.pending_id}[/cyan] to apply."
        )


# =============================================================================
# Pending Edit Commands
# =============================================================================


@cli.group("pending")
@click.option("--config", "config_path", default=None, help="Settings file")
@click.pass_context
def pending_group(ctx: click.Context, config_path: str | None):
    """Review pending edits."""
    ctx.ensure_object(dict)
    settings = _load_settings_or_exit(config_path)
    ctx.obj["store"] = PendingEditStore(settings.pending_dir)


@pending_group.command("list")
@click.pass_context
def pending_list(ctx: click.Context):
    """List pending edits."""
    store: PendingEditStore = ctx.obj["store"]
    edits = store.list_edits()

    if not edits:
        console.print("[dim]No pending edits[/dim]")
        return

    table = Table(title="Pending edits")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Document", overflow="fold")
    table.add_column("Updated", style="dim")
    for edit in edits:
        table.add_row(edit.edit_id, edit.path, edit.updated_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)


@pending_group.command("show")
@click.argument("edit_id")
@click.pass_context
def pending_show(ctx: click.Context, edit_id: str):
    """Show the diff of a pending edit."""
    store: PendingEditStore = ctx.obj["store"]
    try:
        edit = store.get_by_id(edit_id)
    except PendingEditNotFoundError as e:
        console_err.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(Panel(edit.path, title=f"Pending edit {edit.edit_id}", border_style="blue"))
    _print_diff(edit.diff)


@pending_group.command("accept")
@click.argument("edit_id")
@click.pass_context
def pending_accept(ctx: click.Context, edit_id: str):
    """Write a pending edit to its document."""
    store: PendingEditStore = ctx.obj["store"]
    try:
        edit = store.accept(edit_id)
    except (PendingEditNotFoundError, StaleEditError) as e:
        console_err.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Applied {edit.edit_id} to {edit.path}")


@pending_group.command("discard")
@click.argument("edit_id")
@click.pass_context
def pending_discard(ctx: click.Context, edit_id: str):
    """Discard a pending edit."""
    store: PendingEditStore = ctx.obj["store"]
    if store.discard(edit_id):
        console.print(f"[green]✓[/green] Discarded {edit_id}")
    else:
        console_err.print(f"[red]Error:[/red] Pending edit '{edit_id}' not found.")
        sys.exit(1)


# =============================================================================
# Config Commands
# =============================================================================


@cli.group()
def config():
    """Inspect settings."""
    pass


@config.command("show")
@click.option("--config", "config_path", default=None, help="Settings file")
def config_show(config_path: str | None):
    """Show the effective settings."""
    settings = _load_settings_or_exit(config_path)

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


if __name__ == "__main__":
    cli()
