# linelog/core/errors.py
from __future__ import annotations


class LineLogError(Exception):
    """
    Base class for all expected operational errors in linelog.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, diagnostics, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class LoggerConfigError(LineLogError):
    """
    Logger configuration file is missing, malformed or has invalid values.

    Examples:
      - YAML file not found
      - missing 'logger' root node
      - precision is not a non-negative integer
    """
    code = "logger_config_error"


class ConfigConflictError(LineLogError):
    """
    A setting was changed while it is frozen.

    Examples:
      - header changed after the first row went to the file
      - log_time toggled while writing
    """
    code = "config_conflict"


# ---------------------------------------------------------------------------
# File I/O errors
# ---------------------------------------------------------------------------

class LogFileOpenError(LineLogError):
    """
    Log file could not be opened for appending.

    Examples:
      - parent directory cannot be created
      - permission denied
      - path is a directory
    """
    code = "log_file_open_error"


class LogFileWriteError(LineLogError):
    """
    A line could not be written to an open log file.

    Examples:
      - disk full
      - OS-level I/O error during write/flush
    """
    code = "log_file_write_error"


class LogFileNotOpenError(LineLogError):
    """
    A data line was submitted while no valid file handle exists.

    Examples:
      - handle closed behind the logger's back
      - logger was disposed and no new filename was given
    """
    code = "log_file_not_open"
