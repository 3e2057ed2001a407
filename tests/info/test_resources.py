"""Tests for info/resources.py module."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from symbolinfo.info.resources import SysPathResources


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    (root / "pkg").mkdir(parents=True)
    (root / "pkg" / "mod.py").write_text("x = 1\n")
    return root


@pytest.fixture
def wheel(tmp_path: Path) -> Path:
    archive = tmp_path / "dist" / "other.whl"
    archive.parent.mkdir()
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("other/api.py", "y = 2\n")
    return archive


class TestSysPathResources:
    """Tests for resource lookup over search roots."""

    def test_directory_root(self, site: Path) -> None:
        found = SysPathResources([str(site)]).exists("pkg/mod.py")
        assert found == (site / "pkg" / "mod.py").resolve().as_uri()

    def test_archive_root(self, site: Path, wheel: Path) -> None:
        found = SysPathResources([str(site), str(wheel)]).exists("other/api.py")
        assert found == f"zip:{wheel.resolve()}!/other/api.py"

    def test_first_root_wins(self, tmp_path: Path, site: Path) -> None:
        shadow = tmp_path / "shadow"
        (shadow / "pkg").mkdir(parents=True)
        (shadow / "pkg" / "mod.py").write_text("")
        found = SysPathResources([str(shadow), str(site)]).exists("pkg/mod.py")
        assert found is not None
        assert "shadow" in found

    @pytest.mark.parametrize("relative", ["", "/etc/passwd", "../site/pkg/mod.py", "pkg/none.py"])
    def test_not_found(self, site: Path, relative: str) -> None:
        assert SysPathResources([str(site)]).exists(relative) is None

    def test_directories_are_not_resources(self, site: Path) -> None:
        assert SysPathResources([str(site)]).exists("pkg") is None

    def test_defaults_to_sys_path(self, site: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.path", ["", str(site)])
        assert SysPathResources().exists("pkg/mod.py") is not None
