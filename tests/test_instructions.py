"""Tests for marker decoding."""

import pytest

from gridbf.instructions import (
    COMMANDS, Marker, Symbol, decode, marker_for_glyph, marker_for_symbol, parse_marker,
)


@pytest.mark.parametrize("marker,symbol", [
    (Marker.LIGHT_GRAY_WOOL, "<"),
    (Marker.GRAY_WOOL, ">"),
    (Marker.LIME_WOOL, "+"),
    (Marker.RED_WOOL, "-"),
    (Marker.BLACK_WOOL, "."),
    (Marker.WHITE_WOOL, ","),
    (Marker.YELLOW_WOOL, "["),
    (Marker.LIGHT_BLUE_WOOL, "]"),
    (Marker.PINK_WOOL, "n"),
    (Marker.MAGENTA_WOOL, "e"),
])
def test_legend(marker, symbol):
    assert decode(marker).value == symbol


def test_legend_is_one_to_one():
    assert len(COMMANDS) == 10
    assert len(set(COMMANDS.values())) == 10
    assert Symbol.NOOP not in COMMANDS.values()


@pytest.mark.parametrize("marker", [Marker.AIR, 42, -1, None, "lime_wool", [3]])
def test_everything_else_is_a_noop(marker):
    assert decode(marker) is Symbol.NOOP


def test_raw_codes_decode_like_markers():
    assert decode(3) is Symbol.INC
    assert decode(int(Marker.MAGENTA_WOOL)) is Symbol.END


def test_parse_marker_names():
    assert parse_marker("Lime Wool") is Marker.LIME_WOOL
    assert parse_marker("light-blue-wool") is Marker.LIGHT_BLUE_WOOL
    assert parse_marker(" magenta_wool ") is Marker.MAGENTA_WOOL
    assert parse_marker("dirt") is Marker.AIR


def test_glyph_and_symbol_inverse():
    assert marker_for_glyph("n") is Marker.PINK_WOOL
    assert marker_for_glyph("x") is Marker.AIR
    assert marker_for_glyph(" ") is Marker.AIR
    assert marker_for_symbol(Symbol.LOOP_START) is Marker.YELLOW_WOOL
    assert marker_for_symbol(Symbol.NOOP) is Marker.AIR
