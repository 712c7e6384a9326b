"""
Integration tests for end-to-end transfer behaviour.

Tests cover:
- Structural round trip of folder copy over several tree shapes
- Move only removes originals after a complete copy
- Partial delete tolerance at different depths
- Concrete browser scenarios (New Folder + self-paste, copy of /a into /b)
"""

import sys
from pathlib import Path

import pytest

from twinpane.filesystem import LocalFileSystemProvider
from twinpane.operations import ClipboardState, TransferEngine, TransferError

sys.path.insert(0, str(Path(__file__).parent.parent))
from conftest import FaultyProvider, relative_tree


def build_tree(root: Path, layout: dict) -> None:
    """Create files (str values) and folders (dict values) below ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        if isinstance(value, dict):
            build_tree(root / name, value)
        else:
            (root / name).write_text(value)


TREE_SHAPES = [
    {},
    {"only.txt": "single"},
    {"x": {}, "y": {"z": {}}},
    {"f1": "1", "f2": "2", "d": {"f3": "3", "e": {"f4": "4", "g": {"f5": "5"}}}},
    {"same": {"same": {"same": "nested same names"}}, "same.txt": "top"},
]


@pytest.mark.integration
class TestCopyRoundTrip:
    """copy(a) then paste(d) reproduces a below d/name(a)."""

    @pytest.mark.parametrize("shape", TREE_SHAPES)
    def test_round_trip(self, engine: TransferEngine, temp_dir: Path, shape: dict):
        source = temp_dir / "src" / "a"
        build_tree(source, shape)
        destination = temp_dir / "d"
        destination.mkdir()
        before = relative_tree(source)

        engine.clipboard.copy(source)
        pasted = engine.paste(destination)

        assert pasted == destination / "a"
        assert relative_tree(pasted) == before
        assert relative_tree(source) == before

    def test_file_copy_new_target(self, engine: TransferEngine, temp_dir: Path):
        source = temp_dir / "f.dat"
        source.write_bytes(bytes(range(256)) * 64)
        destination = temp_dir / "d"
        destination.mkdir()

        engine.clipboard.copy(source)
        engine.paste(destination)

        assert (destination / "f.dat").read_bytes() == source.read_bytes()


@pytest.mark.integration
class TestMoveSafety:
    """No originals are lost on a failed move."""

    @pytest.mark.parametrize("failing", ["f1", "f3", "f5"])
    def test_failed_move_keeps_source(self, temp_dir: Path, failing: str):
        source = temp_dir / "a"
        build_tree(source, TREE_SHAPES[3])
        before = relative_tree(source)
        destination = temp_dir / "d"
        destination.mkdir()
        clipboard = ClipboardState()
        engine = TransferEngine(FaultyProvider(fail_copy_on=(failing,)), clipboard)

        clipboard.cut(source)
        with pytest.raises(TransferError):
            engine.paste(destination)

        assert relative_tree(source) == before

    def test_successful_move(self, engine: TransferEngine, temp_dir: Path):
        source = temp_dir / "a"
        build_tree(source, TREE_SHAPES[3])
        before = relative_tree(source)
        destination = temp_dir / "d"
        destination.mkdir()

        engine.clipboard.cut(source)
        engine.paste(destination)

        assert not source.exists()
        assert relative_tree(destination / "a") == before

    def test_second_paste_after_move_reports_missing_source(self, temp_dir: Path):
        """With the clipboard re-filled, a second paste of a moved source fails cleanly."""
        source = temp_dir / "a"
        build_tree(source, {"f": "x"})
        for name in ("d1", "d2"):
            (temp_dir / name).mkdir()
        clipboard = ClipboardState()
        engine = TransferEngine(LocalFileSystemProvider(), clipboard)

        clipboard.cut(source)
        engine.paste(temp_dir / "d1")
        clipboard.cut(source)

        with pytest.raises(TransferError) as exc_info:
            engine.paste(temp_dir / "d2")

        assert exc_info.value.kind.value == "not_found"
        assert not (temp_dir / "d2" / "a").exists()


@pytest.mark.integration
class TestDeleteTolerance:
    """Interrupted recursive delete leaves a predictable partial state."""

    def test_uninterrupted_delete(self, engine: TransferEngine, temp_dir: Path):
        source = temp_dir / "a"
        build_tree(source, TREE_SHAPES[3])

        engine.delete(source)

        assert not source.exists()

    def test_interrupted_at_depth(self, temp_dir: Path):
        source = temp_dir / "a"
        build_tree(source, TREE_SHAPES[3])
        engine = TransferEngine(FaultyProvider(fail_remove_on=("f4",)), ClipboardState())

        with pytest.raises(TransferError):
            engine.delete(source)

        # Processed before the failure
        assert not (source / "f1").exists()
        assert not (source / "f2").exists()
        assert not (source / "d" / "f3").exists()
        # Failing entry and everything after it remain
        assert (source / "d" / "e" / "f4").exists()
        assert (source / "d" / "e" / "g" / "f5").exists()
        assert (source / "d").is_dir()


@pytest.mark.integration
class TestConcreteScenarios:
    """Scenarios taken from everyday browser use."""

    def test_new_folder_then_self_paste(self, engine: TransferEngine, temp_dir: Path):
        foo = engine.create_directory(temp_dir, "Foo")
        assert foo.is_dir() and list(foo.iterdir()) == []

        engine.clipboard.copy(foo)
        engine.paste(temp_dir)

        assert sorted(p.name for p in temp_dir.iterdir()) == ["Foo"]
        assert list(foo.iterdir()) == []

    def test_copy_a_into_missing_b(self, engine: TransferEngine, temp_dir: Path):
        a = temp_dir / "a"
        build_tree(a, {"1.txt": "one", "sub": {"2.txt": "two"}})

        engine.copy_tree(a, temp_dir / "b")

        assert (temp_dir / "b" / "1.txt").read_text() == "one"
        assert (temp_dir / "b" / "sub" / "2.txt").read_text() == "two"
        assert relative_tree(a) == {"1.txt": b"one", "sub": None, "sub/2.txt": b"two"}
