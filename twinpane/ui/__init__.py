"""Terminal UI package for twinpane.

- RichPrompt: Prompt collaborator built on rich.prompt.
- BrowserTUI: Interactive command loop over a BrowserSession.
"""

from .browser_tui import BrowserTUI, RichPrompt

__all__ = ["BrowserTUI", "RichPrompt"]
