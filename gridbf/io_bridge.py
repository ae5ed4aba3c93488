#!/usr/bin/env python3
"""
I/O bridge between the interpreter and its host.

The interpreter only ever asks two things: "output value V" and "give me
the next input token". The host decides how output is shown and where
tokens come from.
"""

import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Iterable, List, Optional

from .diagnostics import Diagnostics, Severity


class InputCancelled(Exception):
    """Raised when a pending input request is abandoned."""


def format_output(value: int, char_mode: bool) -> str:
    if char_mode:
        return f'"{chr(value)}"'
    return str(value)


class IOBridge(ABC):

    @abstractmethod
    def emit(self, value: int, char_mode: bool) -> None:
        pass

    @abstractmethod
    def request_input(self, cancelled: Callable[[], bool]) -> str:
        """Block until a token is available; raise InputCancelled if cancelled() turns true."""


class InputMailbox:
    """Single-slot holder for the next input token. A new token replaces an unread one."""

    def __init__(self, poll_interval: float = 0.05):
        self.poll_interval = poll_interval
        self._token: Optional[str] = None
        self._cond = threading.Condition()
        self._waiting = False

    def supply(self, token: str) -> None:
        with self._cond:
            self._token = token
            self._cond.notify_all()

    @property
    def waiting(self) -> bool:
        """True while a reader is blocked with nothing to read."""
        with self._cond:
            return self._waiting and self._token is None

    @property
    def pending(self) -> Optional[str]:
        with self._cond:
            return self._token

    def clear(self) -> None:
        with self._cond:
            self._token = None

    def take(self, cancelled: Callable[[], bool] = lambda: False) -> str:
        """Wait for a token and consume it."""
        with self._cond:
            try:
                while self._token is None:
                    if cancelled():
                        raise InputCancelled("input request cancelled")
                    self._waiting = True
                    self._cond.wait(timeout=self.poll_interval)
                token, self._token = self._token, None
                return token
            finally:
                self._waiting = False


class ConsoleIO(IOBridge):
    """Reports output through diagnostics and waits on a mailbox for input."""

    def __init__(self, diagnostics: Diagnostics, mailbox: Optional[InputMailbox] = None):
        self.diagnostics = diagnostics
        self.mailbox = mailbox or InputMailbox()

    def emit(self, value: int, char_mode: bool) -> None:
        self.diagnostics.report(Severity.IO, "Output: " + format_output(value, char_mode))

    def request_input(self, cancelled: Callable[[], bool]) -> str:
        if self.mailbox.pending is None:
            self.diagnostics.report(Severity.IO, "Input via input command:")
        return self.mailbox.take(cancelled)


class ScriptedIO(IOBridge):
    """Serves input tokens from a list and records every output value."""

    def __init__(self, tokens: Iterable[str] = ()):
        self.tokens = deque(tokens)
        self.outputs: List[int] = []
        self.requests = 0

    def emit(self, value: int, char_mode: bool) -> None:
        self.outputs.append(value)

    def request_input(self, cancelled: Callable[[], bool]) -> str:
        self.requests += 1
        if cancelled() or not self.tokens:
            raise InputCancelled("no scripted input left")
        return self.tokens.popleft()

    def text(self) -> str:
        return "".join(chr(v) for v in self.outputs)
