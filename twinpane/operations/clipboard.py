"""Clipboard holding at most one pending copy/cut intent."""

import logging
from pathlib import Path
from typing import Optional

from twinpane.models import TransferMode

logger = logging.getLogger(__name__)


class ClipboardState:
    """Pending transfer intent: a source path and a TransferMode.

    The clipboard is independent of navigation and survives it. copy() and
    cut() overwrite any previous content (last write wins); neither touches
    the file system. TransferEngine.paste() reads it and clears it after a
    successful cut.
    """

    def __init__(self) -> None:
        self.source_path: Optional[Path] = None
        self.mode: TransferMode = TransferMode.COPY

    @property
    def is_empty(self) -> bool:
        return self.source_path is None

    def copy(self, path: Path) -> None:
        self._set(path, TransferMode.COPY)

    def cut(self, path: Path) -> None:
        """Remember ``path`` for a move; the source is removed at paste time."""
        self._set(path, TransferMode.CUT)

    def clear(self) -> None:
        self.source_path = None
        self.mode = TransferMode.COPY

    def _set(self, path: Path, mode: TransferMode) -> None:
        self.source_path = Path(path)
        self.mode = mode
        logger.debug(f"Clipboard set ({mode.value}): {self.source_path}")
