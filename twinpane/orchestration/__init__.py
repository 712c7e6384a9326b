"""Workflow orchestration package for twinpane.

- BrowserSession: Controller connecting navigation, clipboard, transfers
  and the Prompt/ExternalOpener collaborators.
"""

from twinpane.orchestration.browser_session import BrowserSession

__all__ = ["BrowserSession"]
