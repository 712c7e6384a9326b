"""File operations package for twinpane.

This package provides the clipboard, the TransferEngine executing create,
rename, delete and paste requests, and the TransferError hierarchy.

Example:
    >>> from twinpane.filesystem import LocalFileSystemProvider
    >>> from twinpane.operations import ClipboardState, TransferEngine
    >>> clipboard = ClipboardState()
    >>> engine = TransferEngine(LocalFileSystemProvider(), clipboard)
    >>> clipboard.copy(Path("/tmp/a"))
    >>> engine.paste(Path("/tmp/b"))
    PosixPath('/tmp/b/a')
"""

from .clipboard import ClipboardState
from .errors import (
    AlreadyExistsError,
    ClipboardEmptyError,
    ErrorKind,
    InvalidNameError,
    InvalidOperationError,
    NotFoundError,
    OperationCancelledError,
    PermissionDeniedError,
    TransferError,
    TransferIOError,
)
from .transfer_engine import TransferEngine

__all__ = [
    "ClipboardState",
    "TransferEngine",
    "ErrorKind",
    "TransferError",
    "NotFoundError",
    "AlreadyExistsError",
    "PermissionDeniedError",
    "TransferIOError",
    "InvalidNameError",
    "InvalidOperationError",
    "ClipboardEmptyError",
    "OperationCancelledError",
]
