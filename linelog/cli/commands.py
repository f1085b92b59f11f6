# linelog/cli/commands.py
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from linelog.app.config import LoggerConfig
from linelog.core.session import CsvLogger
from linelog.interfaces.line_sink import LineSink

_log = logging.getLogger(__name__)


def parse_token(token: str) -> Any:
    """int if it looks like one, then float, else the stripped text."""
    s = token.strip()
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        return s


def parse_row(line: str) -> List[Any]:
    return [parse_token(t) for t in line.rstrip("\r\n").split(",")]


def cmd_log(
    config: LoggerConfig,
    lines: Iterable[str],
    *,
    console: Optional[LineSink] = None,
) -> int:
    """
    Log every non-blank input line as one row.

    Exit code 0 when every row was recorded, 1 if any row was dropped.
    """
    if not config.to_console and not config.filename:
        print("ERROR: no output file given")
        print("Hint: pass --file PATH, set 'filename' in the config, or use --console")
        return 2

    total = 0
    dropped = 0
    with CsvLogger.from_config(config, console=console) as logger:
        for line in lines:
            if not line.strip():
                continue
            total += 1
            if not logger.log(parse_row(line)):
                dropped += 1
        path = logger.filename

    _log.info("CLI_LOG_DONE rows=%d dropped=%d target=%s", total, dropped,
              "console" if config.to_console else path)
    if dropped:
        print(f"WARNING: {dropped} of {total} row(s) were not recorded")
        return 1
    return 0
