"""Navigation package for twinpane."""

from .navigation_synchronizer import NavigationSynchronizer

__all__ = ["NavigationSynchronizer"]
