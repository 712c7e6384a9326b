"""File-system provider package for twinpane.

- FileSystemProvider: Protocol of single-entry primitives used by the core.
- LocalFileSystemProvider: Implementation for local paths.
- normalize_path: Absolute/normalized path helper with a home fallback.
"""

from .local_provider import FileSystemProvider, LocalFileSystemProvider, normalize_path

__all__ = ["FileSystemProvider", "LocalFileSystemProvider", "normalize_path"]
