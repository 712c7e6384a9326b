"""Exceptions raised by twinpane operations.

Every failure of a navigation or transfer operation is reported as a
TransferError subclass carrying an ErrorKind and the path involved. Raw
OSError instances coming from a FileSystemProvider are converted with
translate_os_error(), which keeps the original exception as __cause__.
"""

import errno
from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(Enum):
    """Categories of operation failure."""
    NOT_FOUND = "not_found"                    # Path vanished between lookup and use
    ALREADY_EXISTS = "already_exists"          # Creation collision
    PERMISSION_DENIED = "permission_denied"    # Access refused by the OS
    IO_ERROR = "io_error"                      # Generic provider failure
    INVALID_NAME = "invalid_name"              # Empty or illegal entry name
    INVALID_OPERATION = "invalid_operation"    # e.g. pasting a folder into itself
    CLIPBOARD_EMPTY = "clipboard_empty"        # Paste with nothing copied
    CANCELLED = "cancelled"                    # User declined a confirmation


class TransferError(Exception):
    """Base class for all twinpane operation failures."""

    kind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message}: {self.path}"
        return self.message


class NotFoundError(TransferError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(TransferError):
    kind = ErrorKind.ALREADY_EXISTS


class PermissionDeniedError(TransferError):
    kind = ErrorKind.PERMISSION_DENIED


class TransferIOError(TransferError):
    kind = ErrorKind.IO_ERROR


class InvalidNameError(TransferError):
    kind = ErrorKind.INVALID_NAME


class InvalidOperationError(TransferError):
    kind = ErrorKind.INVALID_OPERATION


class ClipboardEmptyError(TransferError):
    kind = ErrorKind.CLIPBOARD_EMPTY


class OperationCancelledError(TransferError):
    kind = ErrorKind.CANCELLED


def translate_os_error(
    error: OSError, message: str, path: Optional[Path] = None
) -> TransferError:
    """
    Map an OSError raised by a provider primitive onto a TransferError.

    Parameters:
        error (OSError): The exception raised by the provider.
        message (str): Description of the operation that failed.
        path (Optional[Path]): Path the operation was acting on.

    Returns:
        TransferError: NotFoundError, AlreadyExistsError, PermissionDeniedError
            or TransferIOError, with the OS reason appended to the message.
    """
    detail = f"{message} ({error.strerror or error})"
    if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
        result: TransferError = NotFoundError(detail, path)
    elif isinstance(error, FileExistsError) or error.errno == errno.EEXIST:
        result = AlreadyExistsError(detail, path)
    elif isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
        result = PermissionDeniedError(detail, path)
    else:
        result = TransferIOError(detail, path)
    result.__cause__ = error
    return result
