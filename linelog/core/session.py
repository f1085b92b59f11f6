# linelog/core/session.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, TextIO, Tuple

from linelog.common.paths import ensure_parent_dir, resolve_log_path, writable_base_dir
from linelog.core.errors import (
    ConfigConflictError,
    LogFileNotOpenError,
    LogFileOpenError,
    LogFileWriteError,
)
from linelog.core.line_builder import TIMESTAMP_HEADER, LineBuilder
from linelog.interfaces.change_listener import ChangeListener
from linelog.interfaces.line_sink import LineSink

if TYPE_CHECKING:
    from linelog.app.config import LoggerConfig


class SessionState(Enum):
    CLOSED = "closed"
    NEEDS_REOPEN = "needs_reopen"
    OPEN = "open"


class CsvLogger:
    """
    Appends one delimited line per row to a lazily opened file (or the console).

    Lifecycle:
      - NEEDS_REOPEN: no handle yet, or filename changed / close() called.
        The next log() resolves the path, opens it for appending and writes
        the header if the file is empty.
      - OPEN: handle valid, header handled; `writing` is True and header,
        log_time and to_console are frozen.
      - CLOSED: disposed. log() drops rows until set_filename() is called
        again (the current name revives it too).

    Nothing raises out of log()/close()/set_*(): failures are reported on the
    logger (CRITICAL for conflicts and I/O, WARNING for length mismatch) and
    the affected row is dropped.

    Not thread-safe; callers serialize access.
    """

    def __init__(
        self,
        filename: str = "",
        header: Sequence[str] = (),
        *,
        log_time: bool = True,
        log_millis: bool = True,
        to_console: bool = False,
        precision: int = 2,
        timestamp_header: str = TIMESTAMP_HEADER,
        enabled: bool = True,
        console: Optional[LineSink] = None,
        base_dir: Callable[[], Path] = writable_base_dir,
        clock: Optional[Callable[[], datetime]] = None,
        on_change: Optional[Callable[[str, Any], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._log = logger or logging.getLogger(__name__)

        self._filename = str(filename)
        self._header: Tuple[str, ...] = tuple(str(h) for h in header)
        self._log_time = bool(log_time)
        self._log_millis = bool(log_millis)
        self._to_console = bool(to_console)
        self._precision = 2
        self._enabled = bool(enabled)

        if console is None:
            from linelog.app.sinks import ConsoleSink
            console = ConsoleSink()
        self._console = console
        self._base_dir = base_dir

        self._on_change = on_change
        self._listeners: List[ChangeListener] = []

        self._builder = LineBuilder(
            header=lambda: self._header,
            log_time=lambda: self._log_time,
            log_millis=lambda: self._log_millis,
            precision=lambda: self._precision,
            timestamp_header=timestamp_header,
            clock=clock,
            logger=self._log,
        )

        self._fh: Optional[TextIO] = None
        self._path: Optional[Path] = None
        self._state = SessionState.NEEDS_REOPEN
        self._writing = False

        # negative values are reported and the default kept
        if self._valid_precision(int(precision)):
            self._precision = int(precision)

    @classmethod
    def from_config(cls, config: "LoggerConfig", **kwargs: Any) -> "CsvLogger":
        return cls(
            config.filename,
            config.header,
            log_time=config.log_time,
            log_millis=config.log_millis,
            to_console=config.to_console,
            precision=config.precision,
            timestamp_header=config.timestamp_header,
            enabled=config.enabled,
            **kwargs,
        )

    # --- state ---
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def writing(self) -> bool:
        return self._writing

    @property
    def path(self) -> Optional[Path]:
        """Path of the currently open file (None when no handle is held)."""
        return self._path

    # --- configuration ---
    @property
    def filename(self) -> str:
        return self._filename

    @property
    def header(self) -> Tuple[str, ...]:
        return self._header

    @property
    def log_time(self) -> bool:
        return self._log_time

    @property
    def log_millis(self) -> bool:
        return self._log_millis

    @property
    def to_console(self) -> bool:
        return self._to_console

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def timestamp_header(self) -> str:
        return self._builder.timestamp_header

    def set_filename(self, filename: str) -> bool:
        filename = str(filename)
        if filename == self._filename:
            # same name still revives a disposed logger
            if self._state is SessionState.CLOSED:
                self._state = SessionState.NEEDS_REOPEN
            return True

        self._release_handle()
        self._filename = filename
        self._state = SessionState.NEEDS_REOPEN
        self._writing = False
        self._notify("filename", filename)
        return True

    def set_header(self, header: Sequence[str]) -> bool:
        return self._set_frozen("header", tuple(str(h) for h in header))

    def set_log_time(self, log_time: bool) -> bool:
        return self._set_frozen("log_time", bool(log_time))

    def set_to_console(self, to_console: bool) -> bool:
        return self._set_frozen("to_console", bool(to_console))

    def set_log_millis(self, log_millis: bool) -> bool:
        log_millis = bool(log_millis)
        if log_millis != self._log_millis:
            self._log_millis = log_millis
            self._notify("log_millis", log_millis)
        return True

    def set_precision(self, precision: int) -> bool:
        precision = int(precision)
        if not self._valid_precision(precision):
            return False
        if precision != self._precision:
            self._precision = precision
            self._notify("precision", precision)
        return True

    def set_enabled(self, enabled: bool) -> bool:
        enabled = bool(enabled)
        if enabled != self._enabled:
            self._enabled = enabled
            self._notify("enabled", enabled)
        return True

    # --- listeners ---
    def add_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # --- formatting ---
    def build_header_line(self) -> str:
        return self._builder.build_header_line()

    def build_data_line(self, row: Sequence[Any]) -> str:
        return self._builder.build_data_line(row)

    # --- data path ---
    def log(self, row: Sequence[Any]) -> bool:
        """
        Record one row. Returns True when the line reached the console or file.
        """
        if not self._enabled:
            return False

        if self._to_console:
            return self._log_to_console(row)

        try:
            if self._state is SessionState.NEEDS_REOPEN:
                self._open()

            if self._fh is None or self._fh.closed:
                raise LogFileNotOpenError(
                    "File is not open, valid filename must be provided beforehand",
                    details={"filename": self._filename, "state": self._state.value},
                )

            self._write_line(self._builder.build_data_line(row))
            return True

        except LogFileOpenError as e:
            self._log.critical("CSV_LOGGER_OPEN_FAILED path=%s error=%s", e.details.get("path"), e.message)
        except LogFileNotOpenError as e:
            self._log.critical("CSV_LOGGER_NOT_OPEN filename=%s error=%s", self._filename, e.message)
        except LogFileWriteError as e:
            self._log.critical("CSV_LOGGER_WRITE_FAILED path=%s error=%s", self._path, e.message)
            self._release_handle()
            self._state = SessionState.NEEDS_REOPEN
            self._writing = False
        except Exception:
            # row values or collaborators failing outside the I/O path
            self._log.critical(
                "CSV_LOGGER_LOG_FAILED filename=%s state=%s", self._filename, self._state.value, exc_info=True
            )
        return False

    # --- control ---
    def close(self) -> None:
        """Flush and close the file; the next log() reopens it. Idempotent."""
        self._release_handle()
        if self._state is not SessionState.CLOSED:
            self._state = SessionState.NEEDS_REOPEN
        self._writing = False

    def dispose(self) -> None:
        """Close and park in CLOSED until a new filename is set."""
        self.close()
        self._state = SessionState.CLOSED

    def __enter__(self) -> "CsvLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __del__(self) -> None:
        try: self.dispose()
        except Exception: pass

    # --- internals ---
    def _log_to_console(self, row: Sequence[Any]) -> bool:
        try:
            line = self._builder.build_data_line(row)
        except Exception:
            self._log.critical("CSV_LOGGER_LOG_FAILED target=console", exc_info=True)
            return False
        try:
            self._console.write_line(line)
        except (OSError, ValueError) as e:
            self._log.critical("CSV_LOGGER_CONSOLE_FAILED error=%s", e)
            return False
        except Exception:
            self._log.critical("CSV_LOGGER_CONSOLE_FAILED", exc_info=True)
            return False
        return True

    def _valid_precision(self, precision: int) -> bool:
        if precision < 0:
            self._log.critical("CSV_LOGGER_INVALID_PRECISION value=%d (must be >= 0)", precision)
            return False
        return True

    def _ensure_not_writing(self, name: str) -> None:
        if self._writing:
            raise ConfigConflictError(
                f"{name} cannot be changed while writing",
                hint="close() the logger or switch to a new filename first",
                details={"setting": name, "path": str(self._path)},
            )

    def _set_frozen(self, name: str, value: Any) -> bool:
        # header / log_time / to_console: only while not writing
        attr = "_" + name
        if getattr(self, attr) == value:
            return True
        try:
            self._ensure_not_writing(name)
        except ConfigConflictError as e:
            self._log.critical("CSV_LOGGER_CONFIG_CONFLICT setting=%s error=%s", name, e.message)
            return False
        setattr(self, attr, value)
        self._notify(name, value)
        return True

    def _open(self) -> None:
        if not self._filename:
            raise LogFileOpenError(
                "No filename set",
                hint="set_filename() before logging to a file",
                details={"path": None},
            )

        try:
            path = resolve_log_path(self._filename, self._base_dir)
        except (OSError, RuntimeError) as e:
            raise LogFileOpenError(
                f"Could not resolve log directory: {e}",
                details={"path": self._filename},
            ) from e
        if str(path) != self._filename:
            self._log.debug("CSV_LOGGER_RESOLVED filename=%s path=%s", self._filename, path)
            self._filename = str(path)
            self._notify("filename", self._filename)

        self._log.debug("CSV_LOGGER_OPENING path=%s", path)
        try:
            ensure_parent_dir(path)
            fh = open(path, "a", encoding="utf-8", newline="")
        except OSError as e:
            raise LogFileOpenError(f"Could not open file: {e}", details={"path": str(path)}) from e

        self._fh = fh
        self._path = path
        self._state = SessionState.OPEN
        self._writing = True

        # empty (new or existing) file gets the header; position is at EOF in append mode
        fh.seek(0, os.SEEK_END)
        if fh.tell() == 0:
            header_line = self._builder.build_header_line()
            if header_line:
                self._write_line(header_line)

    def _write_line(self, line: str) -> None:
        fh = self._fh
        if fh is None:
            raise LogFileNotOpenError("File is not open")
        try:
            fh.write(line + "\n")
            fh.flush()
        except (OSError, ValueError) as e:
            raise LogFileWriteError(f"Could not write line: {e}", details={"path": str(self._path)}) from e

    def _release_handle(self) -> None:
        fh, self._fh = self._fh, None
        self._path = None
        if fh is None or fh.closed:
            return
        try:
            fh.flush()
        except OSError as e:
            self._log.critical("CSV_LOGGER_FLUSH_FAILED error=%s", e)
        finally:
            try:
                fh.close()
            except OSError as e:
                self._log.critical("CSV_LOGGER_CLOSE_FAILED error=%s", e)

    def _notify(self, name: str, value: Any) -> None:
        if self._on_change is not None:
            try:
                self._on_change(name, value)
            except Exception:
                self._log.exception("CSV_LOGGER_LISTENER_FAILED setting=%s", name)
        for listener in list(self._listeners):
            try:
                listener.on_changed(name, value)
            except Exception:
                self._log.exception("CSV_LOGGER_LISTENER_FAILED setting=%s", name)
