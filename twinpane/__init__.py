"""twinpane - Two-pane file browser core.

A Python package keeping a directory tree view and a flat listing view in
sync, with a transfer engine for create, rename, delete, copy and move
operations including recursive folder copy and deletion.
"""

__version__ = "0.1.0"

from .models import (
    ActivationAction,
    ActivationResult,
    EntryInfo,
    EntryProperties,
    NavigationState,
    TransferMode,
    TransferReport,
)

__all__ = [
    "__version__",
    "ActivationAction",
    "ActivationResult",
    "EntryInfo",
    "EntryProperties",
    "NavigationState",
    "TransferMode",
    "TransferReport",
]


def main() -> None:
    """Entry point for the twinpane CLI application.

    This function is called when the `twinpane` command is invoked after
    package installation via pip. It imports and runs the Typer app
    from the twinpane.cli module.
    """
    from twinpane.cli import app
    app()
