from __future__ import annotations

from pathlib import Path

from linelog.common.paths import (
    app_data_dir,
    documents_dir,
    ensure_parent_dir,
    resolve_log_path,
    writable_base_dir,
)


def test_documents_dir_prefers_xdg(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("XDG_DOCUMENTS_DIR", str(tmp_path / "Docs"))
    assert documents_dir() == tmp_path / "Docs"


def test_documents_dir_falls_back_to_home(monkeypatch, tmp_path: Path):
    monkeypatch.delenv("XDG_DOCUMENTS_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert documents_dir() == tmp_path / "Documents"


def test_app_data_dir_uses_appdata(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
    assert app_data_dir() == tmp_path / "Roaming" / "linelog"


def test_writable_base_dir_per_platform(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
    monkeypatch.setenv("XDG_DOCUMENTS_DIR", str(tmp_path / "Docs"))
    assert writable_base_dir(platform="win32") == tmp_path / "Roaming" / "linelog"
    assert writable_base_dir(platform="linux") == tmp_path / "Docs"
    assert writable_base_dir(platform="darwin") == tmp_path / "Docs"


def test_resolve_log_path_relative_and_absolute(tmp_path: Path):
    base = tmp_path / "base"
    assert resolve_log_path("a/b.csv", lambda: base) == base / "a" / "b.csv"
    absolute = tmp_path / "x.csv"
    assert resolve_log_path(str(absolute), lambda: base) == absolute


def test_ensure_parent_dir_is_idempotent(tmp_path: Path):
    target = tmp_path / "deep" / "er" / "f.csv"
    ensure_parent_dir(target)
    ensure_parent_dir(target)
    assert target.parent.is_dir()
    assert not target.exists()
