"""Local file-system provider.

This module defines the FileSystemProvider protocol consumed by the
navigation and transfer layers, and LocalFileSystemProvider, its
implementation on top of os, os.scandir and shutil.

Providers expose single-entry primitives only. Recursive behaviour lives in
TransferEngine. Primitives raise OSError subclasses; translating them into
TransferError is the caller's job.

Example:
    >>> from twinpane.filesystem import LocalFileSystemProvider
    >>> provider = LocalFileSystemProvider()
    >>> for entry in provider.list_entries(Path.home()):
    ...     print(entry.name, entry.is_dir)
"""

import logging
import os
import shutil
import stat as stat_module
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, Union

from twinpane.models import EntryInfo

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def normalize_path(path: Optional[PathLike], home: Path) -> Path:
    """Return an absolute, normalized path, falling back to ``home`` when empty."""
    if path is None or str(path) == "":
        return home
    expanded = os.path.expanduser(str(path))
    return Path(os.path.normpath(os.path.abspath(expanded)))


class FileSystemProvider(Protocol):
    """Primitives the core needs from a file system."""

    def list_entries(self, path: Path) -> List[EntryInfo]:
        """List the entries directly under a directory.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        ...

    def stat(self, path: Path) -> EntryInfo:
        """Return metadata for a path without following a final symlink.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        ...

    def exists(self, path: Path) -> bool:
        ...

    def create_dir(self, path: Path, parents: bool = False) -> None:
        """Create a directory.

        Raises:
            FileExistsError: If an entry already exists at ``path`` and
                ``parents`` is False.
        """
        ...

    def remove_file(self, path: Path) -> None:
        ...

    def remove_dir(self, path: Path) -> None:
        """Remove an empty directory."""
        ...

    def copy_file(self, source: Path, destination: Path) -> None:
        ...

    def rename_path(self, source: Path, destination: Path) -> None:
        ...

    def real_path(self, path: Path) -> Path:
        """Resolve symlinks and ``..`` components; ``path`` need not exist."""
        ...

    def same_entry(self, first: Path, second: Path) -> bool:
        """True if both paths name the same on-disk entry (links not followed)."""
        ...


class LocalFileSystemProvider:
    """FileSystemProvider backed by the local operating system."""

    def list_entries(self, path: Path) -> List[EntryInfo]:
        entries: List[EntryInfo] = []
        with os.scandir(path) as it:
            for dirent in it:
                try:
                    entries.append(self._entry_from_stat(
                        Path(dirent.path),
                        dirent.stat(follow_symlinks=False),
                    ))
                except FileNotFoundError:
                    # Removed between scandir and stat
                    logger.debug(f"Entry vanished during listing: {dirent.path}")
        entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))
        return entries

    def stat(self, path: Path) -> EntryInfo:
        return self._entry_from_stat(Path(path), os.lstat(path))

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def create_dir(self, path: Path, parents: bool = False) -> None:
        if parents:
            os.makedirs(path, exist_ok=True)
        else:
            os.mkdir(path)
        logger.debug(f"Created directory: {path}")

    def remove_file(self, path: Path) -> None:
        os.unlink(path)
        logger.debug(f"Removed file: {path}")

    def remove_dir(self, path: Path) -> None:
        os.rmdir(path)
        logger.debug(f"Removed directory: {path}")

    def copy_file(self, source: Path, destination: Path) -> None:
        # Copy file preserving metadata; symlinks are copied as links
        shutil.copy2(source, destination, follow_symlinks=False)
        logger.debug(f"Copied file: {source} -> {destination}")

    def rename_path(self, source: Path, destination: Path) -> None:
        os.rename(source, destination)
        logger.debug(f"Renamed: {source} -> {destination}")

    def real_path(self, path: Path) -> Path:
        return Path(os.path.realpath(path))

    def same_entry(self, first: Path, second: Path) -> bool:
        try:
            a, b = os.lstat(first), os.lstat(second)
        except FileNotFoundError:
            return False
        return (a.st_dev, a.st_ino) == (b.st_dev, b.st_ino)

    @staticmethod
    def _entry_from_stat(path: Path, stat_result: os.stat_result) -> EntryInfo:
        return EntryInfo(
            path=path,
            name=path.name or str(path),
            is_dir=stat_module.S_ISDIR(stat_result.st_mode),
            size_bytes=stat_result.st_size,
            last_modified=datetime.fromtimestamp(stat_result.st_mtime),
        )
