#!/usr/bin/env python3
"""
Host commands

    iotoggle      Toggle input/output mode (char <-> number)
    debugtoggle   Toggle debug mode
    reset         Reset memory
    input <val>   Give input when ',' is met
    run           Run the program

Runs happen on a worker thread so that `input` can be typed while the
program waits for it. Only one run at a time.
"""

import threading
from typing import Callable, Dict, List, Optional

from .brainfuck import BrainfuckInterpreter, RunResult
from .io_bridge import InputMailbox
from .layout import AgentDriver


class CommandHost:
    def __init__(self, interpreter: BrainfuckInterpreter, agent_factory: Callable[[], AgentDriver],
                 mailbox: InputMailbox, background: bool = True):
        self.interpreter = interpreter
        self.agent_factory = agent_factory
        self.mailbox = mailbox
        self.background = background
        self.last_result: Optional[RunResult] = None
        self._worker: Optional[threading.Thread] = None

        self.handlers: Dict[str, Callable[[List[str]], None]] = {
            "iotoggle": self.io_toggle,
            "debugtoggle": self.debug_toggle,
            "reset": self.reset,
            "input": self.input,
            "run": self.run,
        }

    @property
    def diagnostics(self):
        return self.interpreter.diagnostics

    @property
    def busy(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False for blank or unknown commands."""
        parts = line.split()
        if not parts:
            return False
        name, args = parts[0].lower(), parts[1:]
        handler = self.handlers.get(name)
        if handler is None:
            self.diagnostics.warning(f"Unknown command: {name}")
            return False
        handler(args)
        return True

    def io_toggle(self, args: List[str]) -> None:
        self.interpreter.toggle_io_mode()

    def debug_toggle(self, args: List[str]) -> None:
        self.interpreter.toggle_debug()

    def reset(self, args: List[str]) -> None:
        if self.interpreter.is_running:
            self.diagnostics.warning("Cannot reset while a program is running.")
            return
        self.interpreter.reset()

    def input(self, args: List[str]) -> None:
        if not args:
            self.diagnostics.warning("Usage: input <val>")
            return
        self.mailbox.supply(args[0])

    def run(self, args: List[str]) -> None:
        if self.interpreter.is_running or self.busy:
            self.diagnostics.warning("A program is already running.")
            return
        agent = self.agent_factory()
        if not self.background:
            self._run(agent)
            return
        self._worker = threading.Thread(target=self._run, args=(agent,), daemon=True)
        self._worker.start()

    def _run(self, agent: AgentDriver) -> None:
        try:
            self.last_result = self.interpreter.run(agent)
        finally:
            # Unread input belongs to the run that just ended
            self.mailbox.clear()

    def wait(self, timeout: Optional[float] = None) -> Optional[RunResult]:
        """Join the current worker, if any, and return the last result."""
        if self._worker is not None:
            self._worker.join(timeout)
        return self.last_result

    def stop(self, timeout: Optional[float] = None) -> None:
        self.interpreter.abort()
        self.wait(timeout)
