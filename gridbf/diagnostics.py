#!/usr/bin/env python3
"""
User-facing diagnostics.

Every message the interpreter wants a human to see goes through
Diagnostics.report(severity, message). Sinks decide how it is shown; all
reports are mirrored to the standard logging module at DEBUG level
(logger "gridbf.diagnostics") so they show up in log files without
being printed twice.
"""

import logging
import sys
from enum import Enum
from typing import List, Optional, TextIO, Tuple

logger = logging.getLogger("gridbf.diagnostics")


class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    DARK_GREEN = '\033[32m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    REVERSE = '\033[7m'


class Severity(Enum):
    INFO = "info"
    IO = "io"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    DEBUG = "debug"


_STYLE = {
    Severity.INFO: (Colors.BLUE, "ℹ️ "),
    Severity.IO: (Colors.CYAN, "💬 "),
    Severity.WARNING: (Colors.WARNING, "⚠️ Warning: "),
    Severity.ERROR: (Colors.FAIL, "❌ Error: "),
    Severity.SUCCESS: (Colors.GREEN, "✅ "),
    Severity.DEBUG: (Colors.BOLD + Colors.DARK_GREEN, "🐛 "),
}


class Diagnostics:
    """Base reporter: forwards to logging and to emit(), which sinks override."""

    def report(self, severity: Severity, message: str) -> None:
        logger.debug("[%s] %s", severity.value, message)
        self.emit(severity, message)

    def info(self, message: str) -> None:
        self.report(Severity.INFO, message)

    def warning(self, message: str) -> None:
        self.report(Severity.WARNING, message)

    def error(self, message: str) -> None:
        self.report(Severity.ERROR, message)

    def emit(self, severity: Severity, message: str) -> None:
        pass


class ConsoleDiagnostics(Diagnostics):
    """Prints reports to a stream, coloured by severity."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color

    def emit(self, severity: Severity, message: str) -> None:
        colour, prefix = _STYLE[severity]
        if self.color:
            print(f"{colour}{prefix}{message}{Colors.ENDC}", file=self.stream, flush=True)
        else:
            print(f"{prefix}{message}", file=self.stream, flush=True)


class RecordingDiagnostics(Diagnostics):
    """Keeps every report in memory."""

    def __init__(self):
        self.records: List[Tuple[Severity, str]] = []

    def emit(self, severity: Severity, message: str) -> None:
        self.records.append((severity, message))

    def messages(self, severity: Severity) -> List[str]:
        return [m for s, m in self.records if s == severity]

    def clear(self) -> None:
        self.records = []
