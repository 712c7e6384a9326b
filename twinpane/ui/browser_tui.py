"""Terminal User Interface for twinpane.

This module provides RichPrompt, the Rich implementation of the Prompt
collaborator, and BrowserTUI, an interactive command loop standing in for
the tree and listing widgets of a graphical two-pane browser.

Example:
    from twinpane.ui import BrowserTUI, RichPrompt
    from twinpane.orchestration import BrowserSession

    tui = BrowserTUI()
    session = BrowserSession.create(prompt=RichPrompt(tui.console))
    tui.run(session)
"""

import shlex
from pathlib import Path
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from twinpane.filesystem import normalize_path
from twinpane.models import EntryInfo, EntryProperties
from twinpane.operations import TransferError
from twinpane.orchestration import BrowserSession


class RichPrompt:
    """Prompt collaborator backed by rich.prompt.

    Args:
        console: Rich Console used for the questions.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def ask_text(self, title: str, label: str, default: str) -> Optional[str]:
        """Ask for text; an empty answer or Ctrl+C counts as cancel."""
        try:
            answer = Prompt.ask(
                f"[bold]{title}[/bold] - {label}",
                default=default,
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError):
            return None
        answer = answer.strip() if answer else ""
        return answer or None

    def confirm(self, title: str, message: str) -> bool:
        try:
            return Confirm.ask(
                f"[bold]{title}[/bold] - {message}",
                default=False,
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError):
            return False


class BrowserTUI:
    """Rich-based command loop over a BrowserSession.

    Commands:
        ls                  show the listing of the current directory
        cd PATH             enter a directory (files are refused)
        tree PATH           select PATH as if clicked in the tree
        up                  go to the parent directory
        select NAME         highlight an entry of the listing
        open NAME           activate an entry (enter folder / open file)
        mkdir               create a folder (asks for the name)
        rename              rename the selection
        rm                  delete the selection (asks for confirmation)
        copy / cut          put the selection on the clipboard
        paste [DIR]         paste into DIR or the current directory
        info                show properties of the selection
        help                show this help
        quit                leave the browser

    Args:
        console: Optional Rich Console. Pass Console(file=StringIO()) in tests.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def run(self, session: BrowserSession) -> None:
        """Read and execute commands until ``quit`` or end of input."""
        self.display_listing(session)
        while True:
            try:
                line = Prompt.ask(
                    f"[cyan]{session.current_directory}[/cyan]",
                    default="",
                    show_default=False,
                    console=self.console,
                )
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                return
            if not self.execute(session, line):
                return

    def execute(self, session: BrowserSession, line: str) -> bool:
        """Execute a single command line.

        Returns:
            False when the loop should stop, True otherwise.
        """
        try:
            words = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Error:[/red] {escape(str(e))}")
            return True
        if not words:
            return True

        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit", "q"):
            return False

        handlers = self._handlers()
        handler = handlers.get(command)
        if handler is None:
            self.console.print(f"[yellow]Unknown command:[/yellow] {command} (try 'help')")
            return True

        try:
            handler(session, args)
        except TransferError as e:
            self.console.print(f"[red]Error:[/red] {escape(str(e))}")
            return True
        self._display_status(session)
        return True

    def display_listing(self, session: BrowserSession) -> None:
        """Show the current directory as a table, highlighting the selection."""
        try:
            entries = session.list_entries()
        except TransferError as e:
            self.console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
        self.console.print(self.listing_table(
            session.current_directory, entries, session.selected
        ))

    def display_properties(self, properties: EntryProperties) -> None:
        panel = Panel("\n".join(properties.as_lines()), title="Properties", border_style="blue")
        self.console.print(panel)

    def _handlers(self) -> Dict[str, Callable[[BrowserSession, List[str]], None]]:
        return {
            "ls": lambda s, a: self.display_listing(s),
            "cd": self._cmd_cd,
            "tree": self._cmd_tree,
            "up": self._cmd_up,
            "select": self._cmd_select,
            "open": self._cmd_open,
            "mkdir": lambda s, a: s.create_new_folder(),
            "rename": lambda s, a: s.rename_selected(),
            "rm": lambda s, a: s.delete_selected(),
            "copy": lambda s, a: s.copy_selected(),
            "cut": lambda s, a: s.cut_selected(),
            "paste": lambda s, a: s.paste(self._resolve(s, a[0]) if a else None),
            "info": self._cmd_info,
            "help": lambda s, a: self.console.print(self.__doc__.split("Args:")[0], markup=False),
        }

    def _cmd_cd(self, session: BrowserSession, args: List[str]) -> None:
        if not args:
            self.console.print("[yellow]Usage:[/yellow] cd PATH")
            return
        session.change_directory(self._resolve(session, args[0]))
        self.display_listing(session)

    def _cmd_tree(self, session: BrowserSession, args: List[str]) -> None:
        target = self._resolve(session, args[0]) if args else session.navigation.home
        session.tree_clicked(target)
        self.display_listing(session)

    def _cmd_up(self, session: BrowserSession, args: List[str]) -> None:
        if session.go_up() is None:
            self.console.print("[dim]Already at the top.[/dim]")
            return
        self.display_listing(session)

    def _cmd_select(self, session: BrowserSession, args: List[str]) -> None:
        if not args:
            session.navigation.clear_selection()
            return
        session.select(self._resolve(session, args[0]))

    def _cmd_open(self, session: BrowserSession, args: List[str]) -> None:
        if not args:
            self.console.print("[yellow]Usage:[/yellow] open NAME")
            return
        before = session.current_directory
        session.listing_activated(self._resolve(session, args[0]))
        if session.current_directory != before:
            self.display_listing(session)

    def _cmd_info(self, session: BrowserSession, args: List[str]) -> None:
        if args:
            session.select(self._resolve(session, args[0]))
        properties = session.show_properties()
        if properties is None:
            self.console.print("[yellow]Nothing selected.[/yellow]")
            return
        self.display_properties(properties)

    def _display_status(self, session: BrowserSession) -> None:
        self.console.print(f"[dim]{escape(session.status)}[/dim]")

    @staticmethod
    def _resolve(session: BrowserSession, argument: str) -> Path:
        path = Path(argument).expanduser()
        if not path.is_absolute():
            path = session.current_directory / path
        return normalize_path(path, session.navigation.home)

    def listing_table(
        self, directory: Path, entries: List[EntryInfo], selected: Optional[Path]
    ) -> Table:
        table = Table(title=str(directory))
        table.add_column("Name", style="white")
        table.add_column("Size", justify="right")
        table.add_column("Type", style="magenta")
        table.add_column("Date Modified", style="dim")

        for entry in entries:
            name = escape(f"{entry.name}/" if entry.is_dir else entry.name)
            if selected is not None and entry.path == selected:
                name = f"[reverse]{name}[/reverse]"
            size = "" if entry.is_dir else self._format_size(entry.size_bytes)
            kind = "Folder" if entry.is_dir else "File"
            modified = entry.last_modified.strftime("%Y-%m-%d %H:%M")
            table.add_row(name, size, kind, modified)

        if not entries:
            table.caption = "(empty)"
        return table

    @staticmethod
    def _format_size(size_bytes: int) -> str:
        """Format a byte count as B/KB/MB/GB/TB."""
        size = float(size_bytes)
        for unit in ("B", "KB", "MB", "GB"):
            if size < 1024:
                return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} TB"
