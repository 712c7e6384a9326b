"""
Core data models for the twinpane file browser core.

This module contains the following dataclasses:
- EntryInfo: Metadata for one file or directory returned by a provider
- NavigationState: Directory shown in the listing plus the highlighted entry
- ActivationResult: What the caller must do after a listing activation
- EntryProperties: Human-readable properties of a single entry
- TransferReport: Counters collected while pasting or deleting
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .transfer_mode import ActivationAction


@dataclass
class EntryInfo:
    """Metadata for a single file-system entry."""
    path: Path                        # Absolute path of the entry
    name: str                         # Final path component
    is_dir: bool                      # True for directories (symlinks not followed)
    size_bytes: int                   # Size reported by stat
    last_modified: datetime           # Modification time


@dataclass
class NavigationState:
    """Directory displayed in the listing and its highlighted entry."""
    current_directory: Path           # Directory shown by the listing view
    selected_entry: Optional[Path] = None  # Entry to highlight, if any


@dataclass
class ActivationResult:
    """Instruction returned when an entry is activated in the listing."""
    action: ActivationAction          # Navigate or open externally
    path: Path                        # Activated entry


@dataclass
class EntryProperties:
    """Properties shown for a single entry."""
    name: str                         # File or folder name
    path: Path                        # Absolute path
    size_kb: float                    # Size in kilobytes
    kind: str                         # "Folder" or "File"
    last_modified: datetime           # Modification time

    def as_lines(self) -> List[str]:
        """Render the properties as display lines."""
        return [
            f"Name: {self.name}",
            f"Path: {self.path}",
            f"Size: {self.size_kb:.2f} KB",
            f"Type: {self.kind}",
            f"Last Modified: {self.last_modified.strftime('%Y-%m-%d %H:%M:%S')}",
        ]


@dataclass
class TransferReport:
    """Counters for a paste, copy_tree or delete operation."""
    source: Optional[Path] = None     # Entry that was copied or deleted
    destination: Optional[Path] = None  # Paste target, None for deletes
    files_copied: int = 0             # Files written to the destination
    files_overwritten: int = 0        # Destination files replaced
    directories_created: int = 0      # Directories created at the destination
    entries_removed: int = 0          # Files and directories removed
    skipped: bool = False             # Self-paste detected, nothing done
    removed_paths: List[Path] = field(default_factory=list)  # Removal order
