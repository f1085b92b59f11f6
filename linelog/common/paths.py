# linelog/common/paths.py
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Optional

APP_DIRNAME = "linelog"


def documents_dir() -> Path:
    # XDG user dirs first, then the conventional ~/Documents
    xdg = os.environ.get("XDG_DOCUMENTS_DIR")
    if xdg:
        return Path(os.path.expandvars(xdg)).expanduser()
    return Path.home() / "Documents"


def app_data_dir() -> Path:
    appdata = os.environ.get("APPDATA")
    root = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    return root / APP_DIRNAME


def writable_base_dir(*, platform: Optional[str] = None) -> Path:
    """
    Base directory for relative log filenames.

    Documents directory on general platforms, application-data directory
    where documents access is restricted (Windows).
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return app_data_dir()
    return documents_dir()


def resolve_log_path(filename: str, base_dir: Callable[[], Path] = writable_base_dir) -> Path:
    """Absolute filenames are used as-is; relative ones land under base_dir()."""
    p = Path(filename)
    if p.is_absolute():
        return p
    return Path(base_dir()) / p


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
