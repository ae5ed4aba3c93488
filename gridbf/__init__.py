"""Brainfuck interpreter for programs laid out on a grid of markers."""

from .brainfuck import (
    BrainfuckInterpreter,
    DebugRecord,
    HaltReason,
    InterpreterState,
    RunResult,
)
from .config import TAPE_LENGTH, NUM_VALUES, MAX_STEPS, InterpreterConfig, load_config
from .diagnostics import ConsoleDiagnostics, Diagnostics, RecordingDiagnostics, Severity
from .instructions import Marker, Symbol, decode
from .io_bridge import ConsoleIO, IOBridge, InputCancelled, InputMailbox, ScriptedIO
from .layout import AgentDriver, GridAgent, GridLayout, Heading, Position, load_layout

__all__ = [
    "BrainfuckInterpreter",
    "DebugRecord",
    "HaltReason",
    "InterpreterState",
    "RunResult",
    "TAPE_LENGTH",
    "NUM_VALUES",
    "MAX_STEPS",
    "InterpreterConfig",
    "load_config",
    "ConsoleDiagnostics",
    "Diagnostics",
    "RecordingDiagnostics",
    "Severity",
    "Marker",
    "Symbol",
    "decode",
    "ConsoleIO",
    "IOBridge",
    "InputCancelled",
    "InputMailbox",
    "ScriptedIO",
    "AgentDriver",
    "GridAgent",
    "GridLayout",
    "Heading",
    "Position",
    "load_layout",
]
