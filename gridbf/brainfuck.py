#!/usr/bin/env python3
"""
Spatial Brainfuck Interpreter

The program is not a string: an agent stands on a grid of markers, reads
the one under it, executes it and steps forward. Ten commands:
    <   Move the pointer to the left (wraps around the tape)
    >   Move the pointer to the right (wraps around the tape)
    +   Increment the cell at the pointer (mod 256)
    -   Decrement the cell at the pointer (mod 256)
    .   Output the cell, as a character or a number
    ,   Wait for an input token and store it in the cell
    [   Skip forward past the matching ] if the cell is 0
    ]   Jump back to the matching [ if the cell is nonzero
    n   Return to the start of the current row and move to the next row
    e   End of program

Loops are matched on the fly: an entered loop remembers the position of its
[ (and the row start active at that point), a skipped loop is scanned
forward marker by marker. Execution stops after a fixed number of steps.
"""

import logging
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .config import TAPE_LENGTH, NUM_VALUES, MAX_STEPS, InterpreterConfig, DEFAULT_CONFIG
from .diagnostics import Diagnostics, Severity
from .instructions import Symbol, decode
from .io_bridge import IOBridge, InputCancelled
from .layout import AgentDriver, Heading, Position

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class HaltReason(Enum):
    SUCCESS = "success"
    UNMATCHED_OPEN = "unmatched-open"
    UNMATCHED_OPEN_AT_END = "unmatched-open-at-end"
    STEP_LIMIT_EXCEEDED = "step-limit-exceeded"
    ABORTED = "aborted"


@dataclass
class DebugRecord:
    """Machine state right after an instruction was executed."""
    step: int
    symbol: Symbol
    pointer: int
    cell_value: int

    def __str__(self) -> str:
        return f"[Step {self.step}]{self.symbol.value} Ptr: {self.pointer}, Cell: {self.cell_value}"


@dataclass
class RunResult:
    reason: HaltReason
    steps: int
    depth: int = 0
    outputs: List[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.reason is HaltReason.SUCCESS


@dataclass
class InterpreterState:
    tape: List[int] = field(default_factory=lambda: [0] * TAPE_LENGTH)
    pointer: int = 0
    # Position of each entered '[', innermost last
    loop_stack: List[Position] = field(default_factory=list)
    # Row start that was active when each loop was entered
    line_start_stack: List[Position] = field(default_factory=list)
    io_char: bool = True
    debug_mode: bool = False

    @property
    def cell(self) -> int:
        return self.tape[self.pointer]

    @cell.setter
    def cell(self, value: int) -> None:
        self.tape[self.pointer] = value

    def reset(self) -> None:
        """Clear memory and loop bookkeeping; mode flags are kept."""
        self.tape = [0] * TAPE_LENGTH
        self.pointer = 0
        self.loop_stack = []
        self.line_start_stack = []


class _Halt(Exception):
    def __init__(self, reason: HaltReason, depth: int = 0):
        super().__init__(reason.value)
        self.reason = reason
        self.depth = depth


def parse_int(token: str) -> Optional[int]:
    """Leading integer of token ('42', ' -7', '12abc'), or None if there is none."""
    match = _INT_PREFIX.match(token)
    if match is None:
        return None
    return int(match.group(1))


class BrainfuckInterpreter:
    def __init__(self, io: IOBridge, diagnostics: Optional[Diagnostics] = None,
                 config: InterpreterConfig = DEFAULT_CONFIG):
        self.state = InterpreterState(io_char=config.io_char, debug_mode=config.debug_mode)
        self.io = io
        self.diagnostics = diagnostics or Diagnostics()
        # Optional observer for debug records (see debugger.StepTracer)
        self.on_step: Optional[Callable[[DebugRecord], None]] = None
        self.steps = 0

        self._abort = threading.Event()
        self._running = threading.Lock()
        self._heading: Optional[Heading] = None
        self._line_start: Optional[Position] = None
        self._outputs: List[int] = []

    @property
    def is_running(self) -> bool:
        return self._running.locked()

    @property
    def tape(self) -> List[int]:
        return self.state.tape

    @property
    def pointer(self) -> int:
        return self.state.pointer

    def toggle_io_mode(self) -> bool:
        """Switch between character and number I/O."""
        self.state.io_char = not self.state.io_char
        self.diagnostics.info(f"ioChar toggled to: {self.state.io_char}")
        return self.state.io_char

    def toggle_debug(self) -> bool:
        self.state.debug_mode = not self.state.debug_mode
        self.diagnostics.report(Severity.DEBUG, f"Debug mode: {self.state.debug_mode}")
        return self.state.debug_mode

    def reset(self) -> None:
        if self.is_running:
            raise RuntimeError("cannot reset while a program is running")
        self.state.reset()
        self.diagnostics.info("Tape, pointer and cache reset.")

    def abort(self) -> None:
        """Ask the active run to stop at its next step or input wait."""
        self._abort.set()

    def run(self, agent: AgentDriver) -> RunResult:
        """Execute the program under the agent until it ends, faults or is aborted."""
        if not self._running.acquire(blocking=False):
            raise RuntimeError("a program is already running")
        try:
            self._abort.clear()
            # Stacks left by a faulted run belong to that run's layout
            self.state.loop_stack = []
            self.state.line_start_stack = []
            self.diagnostics.info("Code execution starting...")
            # The heading is fixed for the whole run
            self._heading = agent.heading()
            self._line_start = agent.position()
            self._outputs = []
            self.steps = 0
            logger.debug("run starting at %s heading %s", self._line_start, self._heading.name)

            try:
                self._execute(agent)
            except _Halt as halt:
                result = RunResult(halt.reason, self.steps, halt.depth, list(self._outputs))

            self._report_halt(result)
            logger.debug("run halted: %s after %d steps", result.reason.value, result.steps)
            return result
        finally:
            self._running.release()

    def _execute(self, agent: AgentDriver) -> None:
        state = self.state
        while True:
            if self._abort.is_set():
                raise _Halt(HaltReason.ABORTED)
            self.steps += 1
            symbol = decode(agent.inspect())

            if symbol is Symbol.END:
                if state.loop_stack:
                    # Program must not end inside a loop
                    raise _Halt(HaltReason.UNMATCHED_OPEN_AT_END, len(state.loop_stack))
                raise _Halt(HaltReason.SUCCESS)

            advance = self._dispatch(symbol, agent)

            if self.steps >= MAX_STEPS:
                raise _Halt(HaltReason.STEP_LIMIT_EXCEEDED)
            if state.debug_mode:
                self._debug(symbol)
            if advance:
                agent.move_forward(self._heading)

    def _dispatch(self, symbol: Symbol, agent: AgentDriver) -> bool:
        """Execute one symbol. Returns False when the agent must not step forward afterwards."""
        state = self.state

        if symbol is Symbol.LEFT:
            state.pointer = (state.pointer - 1 + TAPE_LENGTH) % TAPE_LENGTH

        elif symbol is Symbol.RIGHT:
            state.pointer = (state.pointer + 1) % TAPE_LENGTH

        elif symbol is Symbol.INC:
            state.cell = (state.cell + 1) % NUM_VALUES

        elif symbol is Symbol.DEC:
            state.cell = (state.cell - 1 + NUM_VALUES) % NUM_VALUES

        elif symbol is Symbol.OUTPUT:
            self._outputs.append(state.cell)
            self.io.emit(state.cell, state.io_char)

        elif symbol is Symbol.INPUT:
            state.cell = self._read_input()

        elif symbol is Symbol.LOOP_START:
            if state.cell == 0:
                self._skip_loop(agent)
            else:
                state.loop_stack.append(agent.position())
                state.line_start_stack.append(self._line_start)

        elif symbol is Symbol.LOOP_END:
            if not state.loop_stack:
                self.diagnostics.warning("Unmatched ']' found. Continuing...")
            elif state.cell != 0:
                # Back to the '['; the forward step lands on the first body instruction
                agent.teleport(state.loop_stack[-1], self._heading)
                self._line_start = state.line_start_stack[-1]
            else:
                state.loop_stack.pop()
                state.line_start_stack.pop()

        elif symbol is Symbol.NEWLINE:
            self._new_line(agent)
            return False

        return True

    def _new_line(self, agent: AgentDriver) -> None:
        agent.teleport(self._line_start, self._heading)
        agent.move_sideways(self._heading)
        self._line_start = agent.position()

    def _skip_loop(self, agent: AgentDriver) -> None:
        """Walk forward to the ']' matching the '[' under the agent, leaving the agent on it."""
        depth = 1
        agent.move_forward(self._heading)
        while True:
            if self._abort.is_set():
                raise _Halt(HaltReason.ABORTED)
            self.steps += 1
            if self.steps >= MAX_STEPS:
                raise _Halt(HaltReason.STEP_LIMIT_EXCEEDED)

            symbol = decode(agent.inspect())
            if symbol is Symbol.LOOP_START:
                depth += 1
            elif symbol is Symbol.LOOP_END:
                depth -= 1
                if depth == 0:
                    return
            elif symbol is Symbol.NEWLINE:
                self._new_line(agent)
                continue
            elif symbol is Symbol.END:
                raise _Halt(HaltReason.UNMATCHED_OPEN, depth)
            agent.move_forward(self._heading)

    def _read_input(self) -> int:
        """Block for a token until one parses in the current I/O mode."""
        state = self.state
        while True:
            try:
                token = self.io.request_input(self._abort.is_set)
            except InputCancelled:
                raise _Halt(HaltReason.ABORTED)

            if state.io_char:
                if not token:
                    self.diagnostics.error("Invalid input: empty")
                    continue
                if len(token) > 1:
                    self.diagnostics.warning(
                        f"Only first character of input '{token}'('{token[0]}') will be used.")
                # Clamp the code point into a cell value
                return max(0, min(NUM_VALUES - 1, ord(token[0])))

            num = parse_int(token)
            if num is not None:
                return num % NUM_VALUES
            self.diagnostics.error(f"Invalid input: {token}")

    def _debug(self, symbol: Symbol) -> None:
        record = DebugRecord(self.steps, symbol, self.state.pointer, self.state.cell)
        self.diagnostics.report(Severity.DEBUG, str(record))
        if self.on_step is not None:
            self.on_step(record)

    def _report_halt(self, result: RunResult) -> None:
        if result.reason is HaltReason.SUCCESS:
            self.diagnostics.report(Severity.SUCCESS, "Code execution finished successfully.")
        elif result.reason is HaltReason.STEP_LIMIT_EXCEEDED:
            self.diagnostics.error(f"Code execution stopped, Step limit({MAX_STEPS}) reached")
        elif result.reason is HaltReason.ABORTED:
            self.diagnostics.warning("Code execution aborted.")
        else:
            self.diagnostics.warning(f"Code finished with {result.depth} unmatched '['")
