from __future__ import annotations

from dotspell.models import FileState, Package, PackageFile, PeerReport


def test_add_file_preserves_insertion_order() -> None:
    package = Package(name="zsh")
    second = PackageFile(path="b", fingerprint="2", state=FileState.PRESENT)
    first = PackageFile(path="a", fingerprint="1", state=FileState.ABSENT)

    package.add_file(second)
    files = package.add_file(first)

    assert files is package.files
    assert [item.path for item in package.files] == ["b", "a"]


def test_peer_report_counts_every_state() -> None:
    package = Package(name="pkg")
    package.add_file(PackageFile(path="a", fingerprint="1", state=FileState.ABSENT))
    package.add_file(PackageFile(path="b", fingerprint="2", state=FileState.ABSENT))
    package.add_file(PackageFile(path="c", fingerprint="3", state=FileState.MISMATCH))

    counts = PeerReport(packages=(package, Package(name="empty"))).counts()

    assert counts == {FileState.ABSENT: 2, FileState.PRESENT: 0, FileState.MISMATCH: 1}
