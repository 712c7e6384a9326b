"""
Models package for twinpane.

This package provides convenient imports for all data models:
- TransferMode: Enum for clipboard copy/cut intents
- ActivationAction: Enum for listing activation outcomes
- EntryInfo: File-system entry metadata
- NavigationState: Shared navigation pointer
- ActivationResult: Listing activation instruction
- EntryProperties: Properties of a single entry
- TransferReport: Paste/delete counters
"""

from .transfer_mode import ActivationAction, TransferMode
from .data_models import (
    ActivationResult,
    EntryInfo,
    EntryProperties,
    NavigationState,
    TransferReport,
)

__all__ = [
    "TransferMode",
    "ActivationAction",
    "EntryInfo",
    "NavigationState",
    "ActivationResult",
    "EntryProperties",
    "TransferReport",
]
