# linelog/interfaces/change_listener.py
from __future__ import annotations

from typing import Any, Protocol


class ChangeListener(Protocol):
    """
    Receives a notification after a logger setting changed.

    name is the setting name ("filename", "header", "log_time", ...),
    value is the new value.
    """
    def on_changed(self, name: str, value: Any) -> None: ...
