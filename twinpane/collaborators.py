"""Collaborator interfaces injected into the twinpane core.

- Prompt: synchronous text input and yes/no confirmation. The Rich-based
  implementation lives in twinpane.ui; tests use scripted fakes.
- ExternalOpener: hands a file to the application the OS associates with it.
- SystemOpener: ExternalOpener built on typer.launch().
"""

import logging
from pathlib import Path
from typing import Optional, Protocol

import typer

logger = logging.getLogger(__name__)


class Prompt(Protocol):
    """Dialog capability used for names and confirmations."""

    def ask_text(self, title: str, label: str, default: str) -> Optional[str]:
        """Ask for a line of text.

        Returns:
            The entered text, or None if the user cancelled.
        """
        ...

    def confirm(self, title: str, message: str) -> bool:
        ...


class ExternalOpener(Protocol):
    """Opens a file with its OS-associated application."""

    def open(self, path: Path) -> None:
        """Open ``path``.

        Raises:
            OSError: If the file could not be handed to an application.
        """
        ...


class SystemOpener:
    """ExternalOpener that delegates to the platform launcher via Typer."""

    def open(self, path: Path) -> None:
        status = typer.launch(str(path))
        if status != 0:
            raise OSError(f"Launcher exited with status {status} for {path}")
        logger.debug(f"Opened externally: {path}")
