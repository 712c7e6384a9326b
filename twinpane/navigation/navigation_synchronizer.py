"""Navigation synchronizer keeping the tree and listing views consistent.

The synchronizer owns the single NavigationState shared by both views. Tree
clicks and listing activations are translated into that state, and the
returned values tell the caller what to mirror into the other view.

Example:
    >>> from twinpane.navigation import NavigationSynchronizer
    >>> nav = NavigationSynchronizer(LocalFileSystemProvider())
    >>> state = nav.select_in_tree(Path("/etc/hosts"))
    >>> state.current_directory, state.selected_entry
    (PosixPath('/etc'), PosixPath('/etc/hosts'))
"""

import logging
from pathlib import Path
from typing import List, Optional

from twinpane.filesystem import FileSystemProvider, normalize_path
from twinpane.filesystem.local_provider import PathLike
from twinpane.models import (
    ActivationAction,
    ActivationResult,
    EntryInfo,
    NavigationState,
)
from twinpane.operations.errors import NotFoundError, translate_os_error

logger = logging.getLogger(__name__)


class NavigationSynchronizer:
    """Owns the current directory shared by the tree and listing views.

    Attributes:
        state: The NavigationState; mutate only through this class.
        home: Fallback directory used for empty navigation targets.
    """

    def __init__(
        self,
        provider: FileSystemProvider,
        start_directory: Optional[PathLike] = None,
        home: Optional[Path] = None,
    ) -> None:
        """Initialize the synchronizer pointing at a default root.

        Args:
            provider: File-system provider used to resolve entries.
            start_directory: Initial directory. Defaults to ``home``.
            home: Fallback directory. Defaults to ``Path.home()``.

        Raises:
            NotFoundError: If the start directory does not exist or is
                not a directory.
        """
        self._provider = provider
        self.home = home if home is not None else Path.home()
        start = normalize_path(start_directory, self.home)
        if not self._stat(start).is_dir:
            raise NotFoundError("Start path is not a directory", start)
        self.state = NavigationState(current_directory=start)

    @property
    def current_directory(self) -> Path:
        return self.state.current_directory

    def select_in_tree(self, path: PathLike) -> NavigationState:
        """Apply a selection made in the tree view.

        A directory becomes the current directory with no selection. A file
        makes its parent the current directory and becomes the selected
        entry, so the listing can highlight it.

        Args:
            path: Entry clicked in the tree.

        Returns:
            The updated NavigationState.

        Raises:
            NotFoundError: If ``path`` no longer exists.
        """
        target = normalize_path(path, self.home)
        entry = self._stat(target)
        if entry.is_dir:
            self.state.current_directory = target
            self.state.selected_entry = None
        else:
            self.state.current_directory = target.parent
            self.state.selected_entry = target
        logger.debug(f"Tree selection: {target} -> listing {self.state.current_directory}")
        return self.state

    def activate_in_listing(self, path: PathLike) -> ActivationResult:
        """Decide what a double-click on a listing entry does.

        Directories yield NAVIGATE; the caller applies it with
        enter_directory() and expands/highlights the path in the tree.
        Files yield OPEN_EXTERNAL and leave the state unchanged.
        """
        target = normalize_path(path, self.home)
        if self._stat(target).is_dir:
            return ActivationResult(ActivationAction.NAVIGATE, target)
        return ActivationResult(ActivationAction.OPEN_EXTERNAL, target)

    def enter_directory(self, path: PathLike) -> NavigationState:
        """Make ``path`` the current directory and clear the selection.

        Raises:
            NotFoundError: If ``path`` is missing or not a directory.
        """
        target = normalize_path(path, self.home)
        if not self._stat(target).is_dir:
            raise NotFoundError("Not a directory", target)
        self.state.current_directory = target
        self.state.selected_entry = None
        return self.state

    def navigate_up(self) -> Optional[Path]:
        """Move to the parent of the current directory.

        Returns:
            The new current directory, or None when already at a
            file-system root (state unchanged).
        """
        current = self.state.current_directory
        parent = current.parent
        if parent == current:
            return None
        self.state.current_directory = parent
        self.state.selected_entry = None
        return parent

    def select_entry(self, path: PathLike) -> NavigationState:
        """Highlight an entry of the current listing."""
        self.state.selected_entry = normalize_path(path, self.home)
        return self.state

    def clear_selection(self) -> None:
        self.state.selected_entry = None

    def list_current(self) -> List[EntryInfo]:
        """List the current directory.

        Raises:
            NotFoundError: If the directory was deleted after it was entered.
        """
        current = self.state.current_directory
        try:
            return self._provider.list_entries(current)
        except OSError as e:
            raise translate_os_error(e, "Cannot list directory", current) from e

    def _stat(self, path: Path) -> EntryInfo:
        try:
            return self._provider.stat(path)
        except OSError as e:
            raise translate_os_error(e, "Cannot access path", path) from e
