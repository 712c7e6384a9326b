"""Allow ``python -m twinpane``."""

from twinpane.cli import app

if __name__ == "__main__":
    app()
