"""
twinpane - CLI Interface.

A command-line front end for the two-pane file browser core. Single
operations (list, create, rename, delete, copy, move, properties) map onto
TransferEngine calls; ``browse`` starts the interactive two-pane session.

Usage Examples:
    # List a directory
    python -m twinpane ls ~/Documents

    # Copy a folder into another directory (silent overwrite)
    python -m twinpane cp ./photos /mnt/backup

    # Move a file, asking before an existing target is replaced
    python -m twinpane mv report.txt ~/archive --confirm-overwrite

    # Delete without the confirmation question
    python -m twinpane rm ./build --yes

    # Interactive browser starting in /tmp
    python -m twinpane browse --start-dir /tmp --verbose
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from twinpane.collaborators import SystemOpener
from twinpane.filesystem import LocalFileSystemProvider, normalize_path
from twinpane.models import TransferMode
from twinpane.operations import (
    ClipboardState,
    OperationCancelledError,
    TransferEngine,
    TransferError,
)
from twinpane.orchestration import BrowserSession
from twinpane.ui import BrowserTUI, RichPrompt

__version__ = "0.1.0"

# Initialize Typer app
app = typer.Typer(
    name="twinpane",
    help="twinpane - Two-pane file browser core: navigate, copy, move and delete.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"twinpane v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route twinpane log records through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    package_logger = logging.getLogger("twinpane")
    package_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )


def build_engine(confirm_overwrite: bool = False) -> TransferEngine:
    """Create a TransferEngine on the local file system with a Rich prompt."""
    return TransferEngine(
        LocalFileSystemProvider(),
        ClipboardState(),
        prompt=RichPrompt(console),
        confirm_overwrite=confirm_overwrite,
    )


def fail(message: str, code: int = 1) -> None:
    """Print an error line and exit with ``code``.

    Raises:
        typer.Exit: Always.
    """
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def _resolve(path: Path) -> Path:
    return normalize_path(path, Path.home())


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable debug logging.",
    ),
) -> None:
    """twinpane - Two-pane file browser core: navigate, copy, move and delete."""
    configure_logging(verbose)


@app.command("ls")
def list_directory(
    path: Path = typer.Argument(Path("."), help="Directory to list."),
) -> None:
    """List the entries of a directory, folders first."""
    engine = build_engine()
    target = _resolve(path)
    try:
        entries = engine.provider.list_entries(target)
    except OSError as e:
        fail(f"Cannot list directory: {target} ({e.strerror or e})")
        return
    tui = BrowserTUI(console)
    console.print(tui.listing_table(target, entries, None))


@app.command()
def mkdir(
    parent: Path = typer.Argument(..., help="Directory to create the folder in."),
    name: str = typer.Argument(..., help="Name of the new folder."),
) -> None:
    """Create an empty folder. Never overwrites an existing entry."""
    try:
        created = build_engine().create_directory(_resolve(parent), name)
    except TransferError as e:
        fail(str(e))
        return
    console.print(f"[green]Created:[/green] {created}")


@app.command()
def rename(
    path: Path = typer.Argument(..., help="Entry to rename."),
    new_name: str = typer.Argument(..., help="New name within the same folder."),
) -> None:
    """Rename a file or folder in place."""
    try:
        new_path = build_engine().rename(_resolve(path), new_name)
    except TransferError as e:
        fail(str(e))
        return
    console.print(f"[green]Renamed to:[/green] {new_path}")


@app.command("rm")
def remove(
    path: Path = typer.Argument(..., help="File or folder to delete."),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Delete without asking for confirmation.",
    ),
) -> None:
    """
    Delete a file, or a folder and everything inside it.

    Deletion is depth-first and stops at the first failure, which can leave
    a folder partially deleted.
    """
    target = _resolve(path)
    engine = build_engine()
    if not yes and not engine.prompt.confirm(
        "Delete", f"Are you sure you want to delete {target.name}?"
    ):
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(1)
    try:
        report = engine.delete(target)
    except TransferError as e:
        fail(str(e))
        return
    console.print(f"[green]Deleted:[/green] {target} ({report.entries_removed} entries)")


def _transfer(
    source: Path, destination_dir: Path, mode: TransferMode, confirm_overwrite: bool
) -> None:
    engine = build_engine(confirm_overwrite)
    source_path = _resolve(source)
    if mode == TransferMode.CUT:
        engine.clipboard.cut(source_path)
    else:
        engine.clipboard.copy(source_path)
    try:
        target = engine.paste(_resolve(destination_dir))
    except OperationCancelledError:
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted; the target may be partially written.[/yellow]")
        raise typer.Exit(130)
    except TransferError as e:
        fail(str(e))
        return

    report = engine.last_report
    if report is not None and report.skipped:
        console.print(f"[yellow]Skipped:[/yellow] {source_path} is already in place.")
        return
    console.print(f"[green]Pasted to:[/green] {target}")
    if report is not None:
        console.print(
            f"[dim]{report.files_copied} file(s) copied, "
            f"{report.files_overwritten} overwritten, "
            f"{report.directories_created} folder(s) created[/dim]"
        )


@app.command("cp")
def copy(
    source: Path = typer.Argument(..., help="File or folder to copy."),
    destination_dir: Path = typer.Argument(..., help="Folder to paste into."),
    confirm_overwrite: bool = typer.Option(
        False,
        "--confirm-overwrite",
        help="Ask before replacing an existing target.",
    ),
) -> None:
    """Copy SOURCE into DESTINATION_DIR, replacing same-named files."""
    _transfer(source, destination_dir, TransferMode.COPY, confirm_overwrite)


@app.command("mv")
def move(
    source: Path = typer.Argument(..., help="File or folder to move."),
    destination_dir: Path = typer.Argument(..., help="Folder to paste into."),
    confirm_overwrite: bool = typer.Option(
        False,
        "--confirm-overwrite",
        help="Ask before replacing an existing target.",
    ),
) -> None:
    """Move SOURCE into DESTINATION_DIR; the source is removed only after a full copy."""
    _transfer(source, destination_dir, TransferMode.CUT, confirm_overwrite)


@app.command()
def info(
    path: Path = typer.Argument(..., help="Entry to describe."),
) -> None:
    """Show name, path, size, type and modification time of an entry."""
    target = _resolve(path)
    session = _build_session(target.parent)
    session.select(target)
    try:
        properties = session.show_properties()
    except TransferError as e:
        fail(str(e))
        return
    BrowserTUI(console).display_properties(properties)


@app.command("open")
def open_entry(
    path: Path = typer.Argument(..., help="File to open with its default application."),
) -> None:
    """Open a file with the application associated with it."""
    target = _resolve(path)
    try:
        SystemOpener().open(target)
    except OSError as e:
        fail(f"Could not open {target}: {e}")


@app.command()
def browse(
    start_dir: Optional[Path] = typer.Option(
        None,
        "--start-dir",
        "-s",
        envvar="TWINPANE_START_DIR",
        help="Directory shown at startup (defaults to the home directory).",
    ),
    confirm_overwrite: bool = typer.Option(
        False,
        "--confirm-overwrite",
        help="Ask before paste replaces an existing target.",
    ),
) -> None:
    """Interactive two-pane browser session (type 'help' for commands)."""
    session = _build_session(start_dir, confirm_overwrite)
    try:
        BrowserTUI(console).run(session)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        raise typer.Exit(130)


def _build_session(
    start_dir: Optional[Path], confirm_overwrite: bool = False
) -> BrowserSession:
    try:
        return BrowserSession.create(
            prompt=RichPrompt(console),
            start_directory=start_dir,
            confirm_overwrite=confirm_overwrite,
        )
    except TransferError as e:
        fail(str(e))
        raise


if __name__ == "__main__":
    app()
