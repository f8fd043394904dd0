from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def fake_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """A source root holding the ``test-pkg`` package and a stray file."""

    root = tmp_path / "dotfiles"
    package = root / "test-pkg"
    (package / ".local" / "share").mkdir(parents=True)
    (package / ".testpkgrc").write_bytes(b"hello")
    (package / ".local" / "share" / "testfile").write_bytes(b"shared data\n")
    (root / "README").write_text("not a package\n")
    return root


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    root = tmp_path / "target"
    root.mkdir()
    return root
