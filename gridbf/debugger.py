#!/usr/bin/env python3
"""
Step tracer

Attach to an interpreter to see the tape after every executed instruction
while debug mode is on:

    Step 12: '+'
    Memory:   [  3|  0| 13|  0|  0|  0]
    Pointer:            ^
    Address:     0   1   2   3   4   5
"""

import sys
from typing import List, Optional, TextIO

from .brainfuck import BrainfuckInterpreter, DebugRecord


class StepTracer:
    """Renders a window of the tape centred on the pointer for each debug record."""

    def __init__(self, interpreter: BrainfuckInterpreter, show_memory_range: int = 10,
                 stream: Optional[TextIO] = None):
        self.interpreter = interpreter
        self.show_memory_range = show_memory_range
        self.stream = stream or sys.stdout
        self.records: List[DebugRecord] = []

    def attach(self) -> "StepTracer":
        self.interpreter.on_step = self
        return self

    def detach(self) -> None:
        if self.interpreter.on_step is self:
            self.interpreter.on_step = None

    def __call__(self, record: DebugRecord) -> None:
        self.records.append(record)
        print(self.render(record), file=self.stream, flush=True)

    def window(self, pointer: int, size: int):
        """Start and end of a tape window of the given size that contains pointer."""
        start = max(0, pointer - self.show_memory_range // 2)
        end = min(size, start + self.show_memory_range)

        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)
        return start, end

    def render(self, record: DebugRecord) -> str:
        memory = self.interpreter.tape
        start, end = self.window(record.pointer, len(memory))

        memory_vals = []
        memory_ptrs = []
        memory_addrs = []
        for i in range(start, end):
            memory_vals.append(f"{memory[i]:3d}")
            memory_ptrs.append(" ^ " if i == record.pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        symbol = record.symbol.value or "·"
        return "\n".join([
            f"Step {record.step}: '{symbol}'",
            "Memory:   [" + "|".join(memory_vals) + "]",
            "Pointer:   " + " ".join(memory_ptrs),
            "Address:   " + " ".join(memory_addrs),
        ])
