"""
Transfer engine for the twinpane file browser core.

This module contains the TransferEngine class, which executes create,
rename, delete and paste requests on top of FileSystemProvider primitives,
including the recursive directory copy and delete algorithms.

Neither recursive algorithm is transactional: a failure stops traversal
immediately and leaves whatever was already written or removed in place.
"""

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from twinpane.collaborators import Prompt
from twinpane.filesystem import FileSystemProvider
from twinpane.models import EntryInfo, TransferMode, TransferReport
from twinpane.operations.clipboard import ClipboardState
from twinpane.operations.errors import (
    AlreadyExistsError,
    ClipboardEmptyError,
    InvalidNameError,
    InvalidOperationError,
    NotFoundError,
    OperationCancelledError,
    translate_os_error,
)

# Configure module logger
logger = logging.getLogger(__name__)


class TransferEngine:
    """
    Executes file-system mutations requested by the browser.

    Overwrites during paste are silent unless the engine was created with
    ``confirm_overwrite=True`` and a Prompt, in which case the user is asked
    once per paste before an existing destination is replaced.
    """

    # Characters that may never appear in a single entry name
    FORBIDDEN_NAME_CHARS = {"/", "\0"} | ({os.sep, os.altsep} - {None})

    def __init__(
        self,
        provider: FileSystemProvider,
        clipboard: ClipboardState,
        prompt: Optional[Prompt] = None,
        confirm_overwrite: bool = False,
    ) -> None:
        """
        Create a TransferEngine.

        Parameters:
            provider (FileSystemProvider): Source of single-entry primitives.
            clipboard (ClipboardState): Clipboard read by paste().
            prompt (Optional[Prompt]): Used to confirm overwrites when enabled.
            confirm_overwrite (bool): Ask before replacing an existing paste target.
        """
        self.provider = provider
        self.clipboard = clipboard
        self.prompt = prompt
        self.confirm_overwrite = confirm_overwrite
        self.last_report: Optional[TransferReport] = None

    def create_directory(self, parent: Path, name: str) -> Path:
        """
        Create an empty directory named ``name`` inside ``parent``.

        Returns:
            Path: The created directory.

        Raises:
            InvalidNameError: If ``name`` is empty or contains a separator.
            AlreadyExistsError: If an entry with that name already exists.
            PermissionDeniedError, TransferIOError: If the provider fails.
        """
        self._validate_name(name)
        target = Path(parent) / name
        if self.provider.exists(target):
            raise AlreadyExistsError("An entry with this name already exists", target)
        self._run(lambda: self.provider.create_dir(target), "Failed to create folder", target)
        logger.info(f"Created folder: {target}")
        return target

    def rename(self, path: Path, new_name: str) -> Path:
        """
        Rename ``path`` to ``new_name`` within the same parent directory.

        Returns:
            Path: The new path (unchanged when the name is the same).

        Raises:
            InvalidNameError: If ``new_name`` is empty or illegal.
            NotFoundError: If ``path`` does not exist.
            AlreadyExistsError: If a sibling named ``new_name`` exists.
            TransferIOError: If the provider rename fails.
        """
        self._validate_name(new_name)
        source = Path(path)
        self._stat(source)
        new_path = source.parent / new_name
        if new_path == source:
            return source
        if self.provider.exists(new_path):
            raise AlreadyExistsError("Cannot rename over an existing entry", new_path)
        self._run(
            lambda: self.provider.rename_path(source, new_path), "Failed to rename", source
        )
        logger.info(f"Renamed: {source} -> {new_path}")
        return new_path

    def delete(self, path: Path) -> TransferReport:
        """
        Delete a file, or a directory and everything below it.

        Directories are removed depth-first: the files of each directory go
        first, then each subdirectory is unwound, then the directory itself.
        The first failure stops the walk; entries removed before it stay
        removed.

        Returns:
            TransferReport: Counts and the order in which entries were removed.

        Raises:
            NotFoundError: If ``path`` does not exist.
            PermissionDeniedError, TransferIOError: On the first failed removal.
        """
        target = Path(path)
        entry = self._stat(target)
        report = TransferReport(source=target)
        self.last_report = report
        if entry.is_dir:
            self._delete_tree(target, report)
        else:
            self._remove_file(target, report)
        logger.info(f"Deleted {target} ({report.entries_removed} entries)")
        return report

    def copy_tree(self, source: Path, destination: Path) -> TransferReport:
        """
        Copy the contents of directory ``source`` into ``destination``.

        Depth-first pre-order walk over (source, destination) pairs:
        1. Create the destination directory (with parents) if missing.
        2. Copy every file directly under the source, replacing a
           same-named destination file.
        3. Descend into every subdirectory.

        Parameters:
            source (Path): Directory to copy from.
            destination (Path): Directory to copy into; created if absent.

        Returns:
            TransferReport: Files copied/overwritten and directories created.

        Raises:
            NotFoundError: If ``source`` is missing or not a directory.
            AlreadyExistsError: If a destination directory is blocked by a file.
            InvalidOperationError: If ``destination`` resolves into ``source``.
            PermissionDeniedError, TransferIOError: On the first failed
                primitive; the destination is left partially populated.
        """
        source = Path(source)
        destination = Path(destination)
        if not self._stat(source).is_dir:
            raise NotFoundError("Source is not a directory", source)
        if self._inside(self._canonical(destination), self._canonical(source)):
            raise InvalidOperationError("Cannot copy a folder into itself", destination)
        report = TransferReport(source=source, destination=destination)
        self.last_report = report

        pending: List[Tuple[Path, Path]] = [(source, destination)]
        while pending:
            src_dir, dst_dir = pending.pop()
            self._ensure_directory(dst_dir, report)

            files, subdirs = self._split_entries(src_dir)
            for entry in files:
                self._copy_file(entry.path, dst_dir / entry.name, report)

            # Reversed so the stack pops subdirectories in listing order
            for entry in reversed(subdirs):
                pending.append((entry.path, dst_dir / entry.name))

        logger.info(
            f"Copied tree {source} -> {destination}: "
            f"{report.files_copied} files, {report.directories_created} folders created"
        )
        return report

    def paste(self, destination_dir: Path) -> Path:
        """
        Paste the clipboard entry into ``destination_dir``.

        The target is ``destination_dir / name(source)``. Files replace an
        existing target; directories are merged into it with copy_tree().
        In CUT mode the source is removed only after the copy fully
        succeeded, and the clipboard is then cleared. COPY content stays on
        the clipboard so it can be pasted again elsewhere.

        Pasting an entry into its own parent, however the parent is spelled
        (``..``, a symlink), is detected and skipped and returns the source.

        Returns:
            Path: The paste target.

        Raises:
            ClipboardEmptyError: If nothing was copied or cut.
            NotFoundError: If the clipboard source no longer exists.
            InvalidOperationError: If a directory is pasted inside itself.
            OperationCancelledError: If the user declined an overwrite.
            AlreadyExistsError, PermissionDeniedError, TransferIOError:
                On the first failed primitive.
        """
        if self.clipboard.is_empty:
            raise ClipboardEmptyError("Nothing to paste")

        source = self.clipboard.source_path
        mode = self.clipboard.mode
        source_entry = self._stat(source)
        target_dir = Path(os.path.abspath(destination_dir))
        destination = target_dir / source.name
        report = TransferReport(source=source, destination=destination)

        # Compare where the paths lead, not how they are spelled
        source_real = self._canonical(source)
        destination_real = self.provider.real_path(target_dir) / source.name
        if destination_real == source_real:
            logger.info(f"Paste skipped, source and target are the same: {source}")
            report.skipped = True
            self.last_report = report
            return source

        if source_entry.is_dir and self._inside(destination_real, source_real):
            raise InvalidOperationError(
                "Cannot paste a folder inside itself", destination
            )

        if self.provider.exists(destination):
            self._confirm_overwrite(destination)

        if source_entry.is_dir:
            report = self.copy_tree(source, destination)
            if mode == TransferMode.CUT:
                removal = self.delete(source)
                report.entries_removed = removal.entries_removed
                report.removed_paths = removal.removed_paths
        else:
            self.last_report = report
            if self.provider.exists(destination):
                if self._stat(destination).is_dir:
                    raise AlreadyExistsError(
                        "A folder with this name already exists", destination
                    )
            self._copy_file(source, destination, report)
            if mode == TransferMode.CUT:
                self._remove_file(source, report)

        report.source = source
        report.destination = destination
        self.last_report = report

        if mode == TransferMode.CUT:
            self.clipboard.clear()
        logger.info(f"Pasted ({mode.value}): {source} -> {destination}")
        return destination

    def _delete_tree(self, directory: Path, report: TransferReport) -> None:
        files, subdirs = self._split_entries(directory)
        for entry in files:
            self._remove_file(entry.path, report)
        for entry in subdirs:
            self._delete_tree(entry.path, report)
        self._run(
            lambda: self.provider.remove_dir(directory), "Failed to delete folder", directory
        )
        report.entries_removed += 1
        report.removed_paths.append(directory)

    def _split_entries(self, directory: Path) -> Tuple[List[EntryInfo], List[EntryInfo]]:
        """List ``directory`` and split it into (files, subdirectories)."""
        entries = self._run(
            lambda: self.provider.list_entries(directory),
            "Failed to read folder",
            directory,
        )
        files = [e for e in entries if not e.is_dir]
        subdirs = [e for e in entries if e.is_dir and e.name not in (".", "..")]
        return files, subdirs

    def _ensure_directory(self, path: Path, report: TransferReport) -> None:
        if self.provider.exists(path):
            if not self._stat(path).is_dir:
                raise AlreadyExistsError("A file blocks the target folder", path)
            return
        self._run(
            lambda: self.provider.create_dir(path, parents=True),
            "Failed to create folder",
            path,
        )
        report.directories_created += 1

    def _copy_file(self, source: Path, destination: Path, report: TransferReport) -> None:
        if self.provider.exists(destination):
            if self.provider.same_entry(source, destination):
                raise InvalidOperationError(
                    "Source and target are the same file", destination
                )
            self._remove_file(destination, report)
            report.files_overwritten += 1
        self._run(
            lambda: self.provider.copy_file(source, destination), "Failed to copy file", source
        )
        report.files_copied += 1

    def _remove_file(self, path: Path, report: TransferReport) -> None:
        self._run(lambda: self.provider.remove_file(path), "Failed to delete file", path)
        report.entries_removed += 1
        report.removed_paths.append(path)

    def _confirm_overwrite(self, destination: Path) -> None:
        if not self.confirm_overwrite or self.prompt is None:
            return
        if not self.prompt.confirm(
            "Overwrite", f"{destination.name} already exists. Overwrite it?"
        ):
            raise OperationCancelledError("Overwrite declined", destination)

    def _canonical(self, path: Path) -> Path:
        """Resolve the parent of ``path`` but keep its final component, so a
        symlink entry still names the link itself."""
        if not path.name:
            return self.provider.real_path(path)
        return self.provider.real_path(path.parent) / path.name

    @staticmethod
    def _inside(path: Path, directory: Path) -> bool:
        return path == directory or directory in path.parents

    def stat(self, path: Path) -> EntryInfo:
        """Return metadata for ``path``, raising NotFoundError if it is gone."""
        return self._stat(Path(path))

    def _stat(self, path: Path) -> EntryInfo:
        return self._run(lambda: self.provider.stat(path), "Cannot access path", path)

    def _validate_name(self, name: str) -> None:
        if name is None or not name.strip():
            raise InvalidNameError("Name must not be empty")
        if name in (".", "..") or any(c in name for c in self.FORBIDDEN_NAME_CHARS):
            raise InvalidNameError(f"Illegal name '{name}'")

    @staticmethod
    def _run(action: Callable, message: str, path: Path):
        """Invoke a provider primitive, converting OSError to TransferError."""
        try:
            return action()
        except OSError as e:
            logger.warning(f"{message}: {path} - {e}")
            raise translate_os_error(e, message, path) from e
