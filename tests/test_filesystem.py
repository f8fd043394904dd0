from __future__ import annotations

from pathlib import Path

import pytest

from dotspell.errors import FileAccessError
from dotspell.filesystem import (
    copy_file,
    ensure_parent,
    fingerprint,
    fingerprint_file,
    remove_file,
    target_exists,
    target_path,
)


def test_fingerprint_known_digests() -> None:
    assert fingerprint(b"test string") == "6f8db599de986fab7a21625b7916589c"
    assert fingerprint(b"") == "d41d8cd98f00b204e9800998ecf8427e"


def test_fingerprint_is_deterministic() -> None:
    content = bytes(range(256)) * 10
    first = fingerprint(content)

    assert fingerprint(content) == first
    assert len(first) == 32
    assert first == first.lower()


def test_fingerprint_file_matches_fingerprint(tmp_path: Path) -> None:
    path = tmp_path / "blob.bin"
    content = b"x" * (3 * 1024 * 1024 + 17)
    path.write_bytes(content)

    assert fingerprint_file(path) == fingerprint(content)


def test_fingerprint_file_missing_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileAccessError) as excinfo:
        fingerprint_file(missing)

    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.cause, FileNotFoundError)
    assert str(missing) in str(excinfo.value)


def test_target_path_joins_posix_parts(tmp_path: Path) -> None:
    assert target_path(tmp_path, ".local/share/testfile") == tmp_path / ".local" / "share" / "testfile"


def test_target_exists(tmp_path: Path) -> None:
    present = tmp_path / "present"
    present.write_text("x")

    assert target_exists(present) is True
    assert target_exists(tmp_path / "absent") is False


def test_target_exists_treats_other_stat_errors_as_present(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    locked = tmp_path / "locked"

    def deny(self: Path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "stat", deny)

    with caplog.at_level("WARNING", logger="dotspell"):
        assert target_exists(locked) is True
    assert "treating it as present" in caplog.text


def test_ensure_parent(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "er" / "file.txt"
    ensure_parent(target)
    assert target.parent.is_dir()


def test_copy_file_creates_parents_and_overwrites(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_bytes(b"new\n")
    destination = tmp_path / "out" / "nested" / "dest.txt"

    copy_file(source, destination)
    assert destination.read_bytes() == b"new\n"

    destination.write_bytes(b"old\n")
    copy_file(source, destination)
    assert destination.read_bytes() == b"new\n"


def test_copy_file_missing_source_reports_source(tmp_path: Path) -> None:
    source = tmp_path / "missing.txt"
    destination = tmp_path / "dest.txt"

    with pytest.raises(FileAccessError) as excinfo:
        copy_file(source, destination)

    assert excinfo.value.path == source
    assert not destination.exists()


def test_copy_file_uncreatable_parent(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_text("data")
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file")

    with pytest.raises(FileAccessError) as excinfo:
        copy_file(source, blocker / "child.txt")

    assert excinfo.value.action == "creating directory"


def test_remove_file(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    path.write_text("abc\n")

    remove_file(path)
    assert not path.exists()

    with pytest.raises(FileAccessError):
        remove_file(path)
