#!/usr/bin/env python3
"""
Marker legend and instruction decoding.

The agent reads one marker (a coloured wool block) per cell:
    Light Gray Wool : <   move pointer left
    Gray Wool       : >   move pointer right
    Lime Wool       : +   increment cell
    Red Wool        : -   decrement cell
    Black Wool      : .   output cell
    White Wool      : ,   read input into cell
    Yellow Wool     : [   start loop
    Light Blue Wool : ]   end loop
    Pink Wool       : n   newline, agent moves to the next row
    Magenta Wool    : e   end of program

Anything else decodes to a no-op.
"""

from enum import Enum, IntEnum
from typing import Any


class Marker(IntEnum):
    AIR = 0
    LIGHT_GRAY_WOOL = 1
    GRAY_WOOL = 2
    LIME_WOOL = 3
    RED_WOOL = 4
    BLACK_WOOL = 5
    WHITE_WOOL = 6
    YELLOW_WOOL = 7
    LIGHT_BLUE_WOOL = 8
    PINK_WOOL = 9
    MAGENTA_WOOL = 10


class Symbol(Enum):
    LEFT = "<"
    RIGHT = ">"
    INC = "+"
    DEC = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_START = "["
    LOOP_END = "]"
    NEWLINE = "n"
    END = "e"
    NOOP = ""


COMMANDS = {
    Marker.LIGHT_GRAY_WOOL: Symbol.LEFT,
    Marker.GRAY_WOOL: Symbol.RIGHT,
    Marker.LIME_WOOL: Symbol.INC,
    Marker.RED_WOOL: Symbol.DEC,
    Marker.BLACK_WOOL: Symbol.OUTPUT,
    Marker.WHITE_WOOL: Symbol.INPUT,
    Marker.YELLOW_WOOL: Symbol.LOOP_START,
    Marker.LIGHT_BLUE_WOOL: Symbol.LOOP_END,
    Marker.PINK_WOOL: Symbol.NEWLINE,
    Marker.MAGENTA_WOOL: Symbol.END,
}

MARKERS = {symbol: marker for marker, symbol in COMMANDS.items()}


def decode(marker: Any) -> Symbol:
    """Map a marker read from the layout to its instruction symbol."""
    try:
        known = marker in COMMANDS
    except TypeError:
        # unhashable values cannot be markers
        known = False
    if known:
        return COMMANDS[marker]
    return Symbol.NOOP


def marker_for_symbol(symbol: Symbol) -> Marker:
    """Inverse legend; NOOP maps to air."""
    return MARKERS.get(symbol, Marker.AIR)


def marker_for_glyph(glyph: str) -> Marker:
    """Marker for a single text glyph such as '+' or 'n'."""
    for symbol, marker in MARKERS.items():
        if symbol.value == glyph:
            return marker
    return Marker.AIR


def parse_marker(name: str) -> Marker:
    """Look up a marker by name, e.g. 'lime_wool' or 'Lime Wool'. Unknown names are air."""
    key = name.strip().upper().replace(" ", "_").replace("-", "_")
    if key in Marker.__members__:
        return Marker[key]
    return Marker.AIR
