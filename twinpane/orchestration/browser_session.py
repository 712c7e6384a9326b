"""BrowserSession for coordinating navigation, clipboard and transfers.

This module provides the BrowserSession class, the controller behind the
two-pane browser. It turns user actions (tree click, listing double-click,
Up, New Folder, Rename, Delete, Copy, Cut, Paste, Properties) into calls on
NavigationSynchronizer and TransferEngine, asks for names and confirmations
through an injected Prompt, and keeps a one-line status message.

Example:
    from twinpane.orchestration import BrowserSession

    session = BrowserSession.create(prompt=my_prompt)
    session.tree_clicked(Path("/tmp"))
    session.select(Path("/tmp/report.txt"))
    session.copy_selected()
    session.tree_clicked(Path("/home/user"))
    session.paste()
    print(session.status)   # "Pasted to: /home/user"
"""

import logging
from pathlib import Path
from typing import List, Optional

from twinpane.collaborators import ExternalOpener, Prompt, SystemOpener
from twinpane.filesystem import FileSystemProvider, LocalFileSystemProvider, normalize_path
from twinpane.filesystem.local_provider import PathLike
from twinpane.models import (
    ActivationAction,
    EntryInfo,
    EntryProperties,
    NavigationState,
    TransferMode,
)
from twinpane.navigation import NavigationSynchronizer
from twinpane.operations import (
    ClipboardState,
    OperationCancelledError,
    TransferEngine,
    TransferError,
)

logger = logging.getLogger(__name__)


class BrowserSession:
    """Controller wiring the browser core to its collaborators.

    Action methods return a value on success and None when the user
    cancelled or nothing was selected. TransferError is logged, written to
    ``status`` and re-raised so the front end can show it.

    Attributes:
        navigation: The NavigationSynchronizer owning NavigationState.
        clipboard: The ClipboardState shared with the engine.
        engine: The TransferEngine executing mutations.
        status: Last status-bar message.
    """

    DEFAULT_FOLDER_NAME = "New Folder"

    def __init__(
        self,
        navigation: NavigationSynchronizer,
        engine: TransferEngine,
        prompt: Prompt,
        opener: Optional[ExternalOpener] = None,
    ) -> None:
        """Initialize the session from already-built components.

        Args:
            navigation: Navigation synchronizer.
            engine: Transfer engine; its clipboard becomes the session's.
            prompt: Dialog capability for names and confirmations.
            opener: External opener for files. Defaults to SystemOpener.
        """
        self.navigation = navigation
        self.engine = engine
        self.clipboard: ClipboardState = engine.clipboard
        self.prompt = prompt
        self.opener = opener if opener is not None else SystemOpener()
        self.status = "Ready"

    @classmethod
    def create(
        cls,
        prompt: Prompt,
        start_directory: Optional[PathLike] = None,
        opener: Optional[ExternalOpener] = None,
        provider: Optional[FileSystemProvider] = None,
        confirm_overwrite: bool = False,
        home: Optional[Path] = None,
    ) -> "BrowserSession":
        """Build a session with a fresh clipboard and local provider."""
        provider = provider if provider is not None else LocalFileSystemProvider()
        navigation = NavigationSynchronizer(provider, start_directory, home=home)
        engine = TransferEngine(
            provider,
            ClipboardState(),
            prompt=prompt,
            confirm_overwrite=confirm_overwrite,
        )
        return cls(navigation, engine, prompt, opener)

    @property
    def state(self) -> NavigationState:
        return self.navigation.state

    @property
    def current_directory(self) -> Path:
        return self.navigation.current_directory

    @property
    def selected(self) -> Optional[Path]:
        return self.navigation.state.selected_entry

    # Navigation

    def tree_clicked(self, path: PathLike) -> NavigationState:
        state = self._guard(lambda: self.navigation.select_in_tree(path))
        self.status = str(state.selected_entry or state.current_directory)
        return state

    def listing_activated(self, path: PathLike) -> NavigationState:
        """Handle a double-click in the listing.

        Directories are entered; files go to the external opener. Opener
        failures only update the status line.
        """
        result = self._guard(lambda: self.navigation.activate_in_listing(path))
        if result.action == ActivationAction.NAVIGATE:
            state = self.navigation.enter_directory(result.path)
            self.status = str(result.path)
            return state

        try:
            self.opener.open(result.path)
            self.status = f"Opened: {result.path}"
        except OSError as e:
            logger.warning(f"Could not open {result.path}: {e}")
            self.status = f"Could not open: {result.path}"
        return self.navigation.state

    def change_directory(self, path: PathLike) -> NavigationState:
        """Enter a directory; a file path is an error, not an activation."""
        state = self._guard(lambda: self.navigation.enter_directory(path))
        self.status = str(state.current_directory)
        return state

    def go_up(self) -> Optional[Path]:
        parent = self.navigation.navigate_up()
        if parent is not None:
            self.status = str(parent)
        return parent

    def select(self, path: PathLike) -> NavigationState:
        return self.navigation.select_entry(path)

    def list_entries(self) -> List[EntryInfo]:
        return self._guard(self.navigation.list_current)

    # Mutations

    def create_new_folder(self) -> Optional[Path]:
        """Ask for a name and create the folder in the current directory."""
        parent = self.current_directory or self.navigation.home
        name = self.prompt.ask_text("New Folder", "Folder Name:", self.DEFAULT_FOLDER_NAME)
        if not name:
            return None
        created = self._guard(lambda: self.engine.create_directory(parent, name))
        self.status = f"Created: {created}"
        return created

    def rename_selected(self) -> Optional[Path]:
        selected = self.selected
        if selected is None:
            return None
        new_name = self.prompt.ask_text("Rename", "New name:", selected.name)
        if not new_name:
            return None
        new_path = self._guard(lambda: self.engine.rename(selected, new_name))
        self.navigation.select_entry(new_path)
        self.status = f"Renamed to: {new_path}"
        return new_path

    def delete_selected(self) -> bool:
        """Delete the selection after confirmation.

        Returns:
            True if the entry was deleted, False if nothing was selected or
            the user declined.
        """
        selected = self.selected
        if selected is None:
            return False
        if not self.prompt.confirm(
            "Delete", f"Are you sure you want to delete {selected.name}?"
        ):
            return False
        self._guard(lambda: self.engine.delete(selected))
        self.navigation.clear_selection()
        self.status = f"Deleted: {selected}"
        return True

    def copy_selected(self) -> Optional[Path]:
        return self._set_clipboard(TransferMode.COPY)

    def cut_selected(self) -> Optional[Path]:
        return self._set_clipboard(TransferMode.CUT)

    def paste(self, destination_dir: Optional[PathLike] = None) -> Optional[Path]:
        """Paste the clipboard into ``destination_dir`` or the current directory."""
        if destination_dir:
            target_dir = normalize_path(destination_dir, self.navigation.home)
        else:
            target_dir = self.current_directory
        try:
            pasted = self._guard(lambda: self.engine.paste(target_dir))
        except OperationCancelledError:
            return None
        self.status = f"Pasted to: {target_dir}"
        return pasted

    def show_properties(self) -> Optional[EntryProperties]:
        selected = self.selected
        if selected is None:
            return None
        info = self._guard(lambda: self.engine.stat(selected))
        return EntryProperties(
            name=info.name,
            path=info.path,
            size_kb=info.size_bytes / 1024.0,
            kind="Folder" if info.is_dir else "File",
            last_modified=info.last_modified,
        )

    def _set_clipboard(self, mode: TransferMode) -> Optional[Path]:
        selected = self.selected
        if selected is None:
            return None
        if mode == TransferMode.CUT:
            self.clipboard.cut(selected)
            self.status = f"Cut: {selected}"
        else:
            self.clipboard.copy(selected)
            self.status = f"Copied: {selected}"
        return selected

    def _guard(self, action):
        """Run ``action``, recording any TransferError in the status line."""
        try:
            return action()
        except OperationCancelledError as e:
            self.status = f"Cancelled: {e.path}"
            raise
        except TransferError as e:
            logger.warning(f"{type(e).__name__}: {e}")
            self.status = f"Error: {e}"
            raise
