"""Pytest fixtures for twinpane tests."""

import os
import platform
import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple

import pytest

from twinpane.filesystem import LocalFileSystemProvider
from twinpane.navigation import NavigationSynchronizer
from twinpane.operations import ClipboardState, TransferEngine
from twinpane.orchestration import BrowserSession


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: multi-component workflows on a real temp tree")


class ScriptedPrompt:
    """Prompt fake answering from pre-recorded lists.

    Every call is recorded in ``calls`` as (method, title, text) tuples.
    """

    def __init__(
        self,
        texts: Optional[List[Optional[str]]] = None,
        confirms: Optional[List[bool]] = None,
    ) -> None:
        self.texts = list(texts or [])
        self.confirms = list(confirms or [])
        self.calls: List[Tuple[str, str, str]] = []

    def ask_text(self, title: str, label: str, default: str) -> Optional[str]:
        self.calls.append(("ask_text", title, default))
        return self.texts.pop(0) if self.texts else default

    def confirm(self, title: str, message: str) -> bool:
        self.calls.append(("confirm", title, message))
        return self.confirms.pop(0) if self.confirms else False


class RecordingOpener:
    """ExternalOpener fake remembering opened paths, optionally failing."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.opened: List[Path] = []

    def open(self, path: Path) -> None:
        if self.fail:
            raise OSError(f"No application for {path}")
        self.opened.append(Path(path))


class FaultyProvider(LocalFileSystemProvider):
    """Local provider that raises OSError on selected primitives.

    Args:
        fail_copy_on: File names whose copy_file call fails.
        fail_remove_on: File names whose remove_file call fails.
        error: Exception instance raised on failure.
    """

    def __init__(
        self,
        fail_copy_on: Tuple[str, ...] = (),
        fail_remove_on: Tuple[str, ...] = (),
        error: Optional[OSError] = None,
    ) -> None:
        self.fail_copy_on = set(fail_copy_on)
        self.fail_remove_on = set(fail_remove_on)
        self.error = error or OSError(5, "Input/output error")
        self.copied: List[Path] = []

    def copy_file(self, source: Path, destination: Path) -> None:
        if Path(source).name in self.fail_copy_on:
            raise self.error
        super().copy_file(source, destination)
        self.copied.append(Path(destination))

    def remove_file(self, path: Path) -> None:
        if Path(path).name in self.fail_remove_on:
            raise self.error
        super().remove_file(path)


def relative_tree(root: Path) -> Dict[str, Optional[bytes]]:
    """Map every entry below ``root`` to its content (None for folders)."""
    result: Dict[str, Optional[bytes]] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        for d in dirnames:
            result[(base / d).relative_to(root).as_posix()] = None
        for f in filenames:
            result[(base / f).relative_to(root).as_posix()] = (base / f).read_bytes()
    return result


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Resolved path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    """Create a small nested tree.

    Creates:
        temp_dir/a/
        ├── 1.txt        ("one")
        ├── empty/
        └── sub/
            ├── 2.txt    ("two")
            └── deeper/
                └── 3.txt ("three")

    Returns:
        Path to ``a``.
    """
    root = temp_dir / "a"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "1.txt").write_text("one")
    (root / "sub" / "2.txt").write_text("two")
    (root / "sub" / "deeper" / "3.txt").write_text("three")
    return root


@pytest.fixture
def provider() -> LocalFileSystemProvider:
    return LocalFileSystemProvider()


@pytest.fixture
def clipboard() -> ClipboardState:
    return ClipboardState()


@pytest.fixture
def engine(provider: LocalFileSystemProvider, clipboard: ClipboardState) -> TransferEngine:
    """TransferEngine on the local file system with silent overwrites."""
    return TransferEngine(provider, clipboard)


@pytest.fixture
def navigation(provider: LocalFileSystemProvider, temp_dir: Path) -> NavigationSynchronizer:
    return NavigationSynchronizer(provider, temp_dir, home=temp_dir)


@pytest.fixture
def prompt() -> ScriptedPrompt:
    return ScriptedPrompt()


@pytest.fixture
def opener() -> RecordingOpener:
    return RecordingOpener()


@pytest.fixture
def session(temp_dir: Path, prompt: ScriptedPrompt, opener: RecordingOpener) -> BrowserSession:
    """BrowserSession rooted at ``temp_dir`` with scripted collaborators."""
    return BrowserSession.create(
        prompt=prompt,
        start_directory=temp_dir,
        opener=opener,
        home=temp_dir,
    )


@pytest.fixture
def read_only_dir(temp_dir: Path) -> Generator[Optional[Path], None, None]:
    """Create a directory without write permission.

    Yields:
        Path to the directory, or None where permissions cannot be enforced
        (Windows, or running as root).
    """
    if platform.system() == "Windows" or (hasattr(os, "geteuid") and os.geteuid() == 0):
        yield None
        return

    locked = temp_dir / "locked"
    locked.mkdir()
    (locked / "keep.txt").write_text("keep")
    original_mode = locked.stat().st_mode
    os.chmod(locked, 0o500)
    try:
        yield locked
    finally:
        os.chmod(locked, original_mode)
