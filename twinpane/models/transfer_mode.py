"""Enums describing clipboard intents and listing activations.

TransferMode records what a pending paste will do with its source:
1. COPY - Source is left in place after the paste
2. CUT  - Source is removed once the paste fully succeeded

ActivationAction records how a double-click in the listing is handled:
1. NAVIGATE      - Directory is entered in both views
2. OPEN_EXTERNAL - File is handed to the external opener
"""

from enum import Enum


class TransferMode(Enum):
    """Clipboard mode for a pending paste."""
    COPY = "copy"                      # Keep the source after paste
    CUT = "cut"                        # Remove the source after a full copy


class ActivationAction(Enum):
    """Outcome of activating an entry in the listing view."""
    NAVIGATE = "navigate"              # Enter directory, mirror into tree
    OPEN_EXTERNAL = "open_external"    # Delegate file to the OS handler
