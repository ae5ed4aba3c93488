#!/usr/bin/env python3
"""
Spatial program layouts and the agent that walks them.

The interpreter never indexes the grid itself. It talks to an AgentDriver:
read the marker under the agent, step forward, step sideways (to the right
of the heading), teleport to a remembered position, and report the current
position and heading. Positions are opaque to the interpreter.

GridLayout is a concrete layout backed by a numpy array of marker codes.
Rows run along the heading; the next row is one step to the agent's right.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import yaml

from .instructions import Marker, marker_for_glyph, parse_marker, decode


@dataclass(frozen=True)
class Position:
    row: int
    col: int


class Heading(Enum):
    NORTH = (-1, 0)
    EAST = (0, 1)
    SOUTH = (1, 0)
    WEST = (0, -1)

    @property
    def right(self) -> "Heading":
        dr, dc = self.value
        return Heading((dc, -dr))

    @classmethod
    def parse(cls, name: str) -> "Heading":
        key = name.strip().upper()
        if key not in cls.__members__:
            raise ValueError(f"unknown heading: {name!r}")
        return cls[key]


class AgentDriver(ABC):
    """What the interpreter needs from the thing that walks the program."""

    @abstractmethod
    def inspect(self) -> Any:
        """Marker under the agent."""

    @abstractmethod
    def move_forward(self, heading: Heading) -> None:
        pass

    @abstractmethod
    def move_sideways(self, heading: Heading) -> None:
        """One step to the right of heading (start of the next row)."""

    @abstractmethod
    def teleport(self, position: Position, heading: Heading) -> None:
        pass

    @abstractmethod
    def position(self) -> Position:
        pass

    @abstractmethod
    def heading(self) -> Heading:
        pass


class GridLayout:
    """A rectangular grid of markers. Cells outside the grid read as air."""

    def __init__(self, cells: np.ndarray, start: Position = Position(0, 0),
                 heading: Heading = Heading.EAST):
        if cells.ndim != 2:
            raise ValueError("layout must be two-dimensional")
        self.cells = cells.astype(np.int8)
        self.start = start
        self.heading = heading

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape

    def marker_at(self, position: Position) -> Marker:
        rows, cols = self.cells.shape
        if 0 <= position.row < rows and 0 <= position.col < cols:
            code = int(self.cells[position.row, position.col])
            if code in Marker._value2member_map_:
                return Marker(code)
        return Marker.AIR

    @classmethod
    def from_markers(cls, rows: List[List[Marker]], **kwargs) -> "GridLayout":
        width = max((len(r) for r in rows), default=0)
        cells = np.zeros((len(rows), width), dtype=np.int8)
        for i, row in enumerate(rows):
            for j, marker in enumerate(row):
                cells[i, j] = int(marker)
        return cls(cells, **kwargs)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "GridLayout":
        """One glyph per cell, e.g. '+++>[+<-]n' / '>.e'. Unknown glyphs are air."""
        lines = text.splitlines()
        while lines and not lines[-1].strip():
            lines.pop()
        rows = [[marker_for_glyph(ch) for ch in line] for line in lines]
        return cls.from_markers(rows, **kwargs)

    @classmethod
    def from_yaml(cls, text: str) -> "GridLayout":
        """
        Load a layout document:

            heading: east
            start: [0, 0]
            rows:
              - [lime_wool, lime_wool, pink_wool]
              - ">.e"

        A row is either a list of marker names or a string of glyphs.
        """
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid layout document: {e}")
        if not isinstance(doc, dict) or "rows" not in doc:
            raise ValueError("layout document must be a mapping with a 'rows' key")
        raw_rows = doc["rows"]
        if not isinstance(raw_rows, list):
            raise ValueError("'rows' must be a list")

        rows: List[List[Marker]] = []
        for i, raw in enumerate(raw_rows):
            if isinstance(raw, str):
                rows.append([marker_for_glyph(ch) for ch in raw])
            elif isinstance(raw, list):
                rows.append([parse_marker(str(name)) if name is not None else Marker.AIR
                             for name in raw])
            else:
                raise ValueError(f"row {i} must be a string or a list of marker names")

        kwargs: Dict[str, Any] = {}
        if "heading" in doc:
            kwargs["heading"] = Heading.parse(str(doc["heading"]))
        if "start" in doc:
            start = doc["start"]
            if not (isinstance(start, list) and len(start) == 2
                    and all(isinstance(v, int) for v in start)):
                raise ValueError("'start' must be [row, col]")
            kwargs["start"] = Position(start[0], start[1])
        return cls.from_markers(rows, **kwargs)

    def to_text(self) -> str:
        lines = []
        for row in self.cells:
            line = "".join(decode(int(m)).value or " " for m in row)
            lines.append(line.rstrip())
        return "\n".join(lines)

    def render(self, agent: Optional[Position] = None) -> str:
        """Grid as glyphs, the agent's cell wrapped in brackets."""
        rows, cols = self.cells.shape
        lines = []
        for r in range(rows):
            parts = []
            for c in range(cols):
                glyph = decode(int(self.cells[r, c])).value or "·"
                if agent is not None and agent == Position(r, c):
                    parts.append(f"[{glyph}]")
                else:
                    parts.append(f" {glyph} ")
            lines.append("".join(parts))
        return "\n".join(lines)


def load_layout(path: Union[str, Path]) -> GridLayout:
    """Load a layout from disk: YAML documents by extension, anything else as glyph text."""
    path = Path(path)
    text = path.read_text()
    if path.suffix.lower() in (".yaml", ".yml"):
        return GridLayout.from_yaml(text)
    return GridLayout.from_text(text)


class GridAgent(AgentDriver):
    """Walks a GridLayout. The agent may step off the grid, where it reads air."""

    def __init__(self, layout: GridLayout, start: Optional[Position] = None,
                 heading: Optional[Heading] = None):
        self.layout = layout
        self._position = start if start is not None else layout.start
        self._heading = heading if heading is not None else layout.heading
        self.moves = 0

    def inspect(self) -> Marker:
        return self.layout.marker_at(self._position)

    def _shift(self, direction: Heading) -> None:
        dr, dc = direction.value
        self._position = Position(self._position.row + dr, self._position.col + dc)
        self.moves += 1

    def move_forward(self, heading: Heading) -> None:
        self._shift(heading)

    def move_sideways(self, heading: Heading) -> None:
        self._shift(heading.right)

    def teleport(self, position: Position, heading: Heading) -> None:
        self._position = position
        self._heading = heading

    def position(self) -> Position:
        return self._position

    def heading(self) -> Heading:
        return self._heading

    def render(self) -> str:
        return self.layout.render(self._position)
