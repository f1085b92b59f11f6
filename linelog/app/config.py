# linelog/app/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from linelog.core.errors import LoggerConfigError
from linelog.core.line_builder import TIMESTAMP_HEADER


@dataclass(frozen=True)
class LoggerConfig:
    filename: str = ""
    header: Tuple[str, ...] = field(default_factory=tuple)
    log_time: bool = True
    log_millis: bool = True
    to_console: bool = False
    precision: int = 2
    timestamp_header: str = TIMESTAMP_HEADER
    enabled: bool = True


_BOOL_KEYS = ("log_time", "log_millis", "to_console", "enabled")
_STR_KEYS = ("filename", "timestamp_header")


def config_from_mapping(data: Dict[str, Any]) -> LoggerConfig:
    """
    Validate a plain mapping (as parsed from YAML) into a LoggerConfig.

    Unknown keys are rejected so typos do not silently fall back to defaults.
    """
    if not isinstance(data, dict):
        raise LoggerConfigError("'logger' node must be a mapping")

    known = set(LoggerConfig.__dataclass_fields__.keys())
    unknown = sorted(set(data.keys()) - known)
    if unknown:
        raise LoggerConfigError(
            f"Unknown logger setting(s): {', '.join(map(str, unknown))}",
            hint=f"Valid settings: {', '.join(sorted(known))}",
        )

    kwargs: Dict[str, Any] = {}

    for key in _STR_KEYS:
        if key in data:
            v = data[key]
            if v is None:
                v = ""
            if not isinstance(v, str):
                raise LoggerConfigError(f"'{key}' must be a string")
            kwargs[key] = v

    for key in _BOOL_KEYS:
        if key in data:
            v = data[key]
            if not isinstance(v, bool):
                raise LoggerConfigError(f"'{key}' must be true or false")
            kwargs[key] = v

    if "header" in data:
        h = data["header"] or []
        if not isinstance(h, (list, tuple)):
            raise LoggerConfigError("'header' must be a list of column names")
        kwargs["header"] = tuple(str(c) for c in h)

    if "precision" in data:
        p = data["precision"]
        if isinstance(p, bool) or not isinstance(p, int) or p < 0:
            raise LoggerConfigError("'precision' must be a non-negative integer")
        kwargs["precision"] = p

    return LoggerConfig(**kwargs)


def load_config(path: str | Path) -> LoggerConfig:
    """
    Load logger settings from a YAML file with a 'logger' root node:

        logger:
          filename: runs/today.csv
          header: [x, y]
          precision: 3
    """
    full_path = Path(path)
    if not full_path.exists():
        raise LoggerConfigError(f"Missing config file: {full_path}")

    try:
        with open(full_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise LoggerConfigError(f"Invalid YAML in {full_path}: {e}") from e

    if not isinstance(data, dict) or "logger" not in data:
        raise LoggerConfigError(f"{full_path.name} is missing 'logger' root node")

    return config_from_mapping(data["logger"] or {})
