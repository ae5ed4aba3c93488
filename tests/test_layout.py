"""Tests for grid layouts and the agent driver."""

import numpy as np
import pytest

from gridbf.instructions import Marker
from gridbf.layout import GridAgent, GridLayout, Heading, Position, load_layout

MULTIPLY = "+++>[+++++++++++++<-]n\n>.e"


def test_heading_right_turns_clockwise():
    assert Heading.EAST.right is Heading.SOUTH
    assert Heading.SOUTH.right is Heading.WEST
    assert Heading.WEST.right is Heading.NORTH
    assert Heading.NORTH.right is Heading.EAST


def test_heading_parse():
    assert Heading.parse(" east ") is Heading.EAST
    with pytest.raises(ValueError):
        Heading.parse("up")


def test_from_text_pads_rows_with_air():
    layout = GridLayout.from_text(MULTIPLY)
    assert layout.shape == (2, 22)
    assert layout.marker_at(Position(0, 0)) is Marker.LIME_WOOL
    assert layout.marker_at(Position(0, 21)) is Marker.PINK_WOOL
    assert layout.marker_at(Position(1, 2)) is Marker.MAGENTA_WOOL
    assert layout.marker_at(Position(1, 10)) is Marker.AIR


def test_cells_outside_the_grid_are_air():
    layout = GridLayout.from_text("+")
    assert layout.marker_at(Position(-1, 0)) is Marker.AIR
    assert layout.marker_at(Position(0, 5)) is Marker.AIR
    assert layout.marker_at(Position(3, 0)) is Marker.AIR


def test_unknown_codes_read_as_air():
    layout = GridLayout(np.array([[3, 42]]))
    assert layout.marker_at(Position(0, 0)) is Marker.LIME_WOOL
    assert layout.marker_at(Position(0, 1)) is Marker.AIR


def test_layout_must_be_two_dimensional():
    with pytest.raises(ValueError):
        GridLayout(np.zeros(4))


def test_text_round_trip():
    assert GridLayout.from_text(MULTIPLY).to_text() == MULTIPLY


def test_from_yaml_marker_names_and_glyphs():
    layout = GridLayout.from_yaml(
        "heading: south\n"
        "start: [0, 1]\n"
        "rows:\n"
        "  - [Lime Wool, light_blue_wool, dirt]\n"
        "  - '>.e'\n"
    )
    assert layout.heading is Heading.SOUTH
    assert layout.start == Position(0, 1)
    assert layout.marker_at(Position(0, 0)) is Marker.LIME_WOOL
    assert layout.marker_at(Position(0, 1)) is Marker.LIGHT_BLUE_WOOL
    assert layout.marker_at(Position(0, 2)) is Marker.AIR
    assert layout.marker_at(Position(1, 2)) is Marker.MAGENTA_WOOL


@pytest.mark.parametrize("doc", [
    "- just a list",
    "rows: 3",
    "rows:\n  - 5",
    "rows: []\nstart: [1]",
    "rows: []\nheading: up",
    "rows: [unclosed",
])
def test_from_yaml_rejects_bad_documents(doc):
    with pytest.raises(ValueError):
        GridLayout.from_yaml(doc)


def test_load_layout_by_extension(tmp_path):
    text_file = tmp_path / "prog.txt"
    text_file.write_text(MULTIPLY + "\n")
    assert load_layout(text_file).shape == (2, 22)

    yaml_file = tmp_path / "prog.yaml"
    yaml_file.write_text("rows:\n  - [white_wool, black_wool, magenta_wool]\n")
    layout = load_layout(yaml_file)
    assert layout.shape == (1, 3)
    assert layout.marker_at(Position(0, 0)) is Marker.WHITE_WOOL


def test_agent_moves_relative_to_heading():
    agent = GridAgent(GridLayout.from_text(MULTIPLY))
    assert agent.position() == Position(0, 0)
    assert agent.heading() is Heading.EAST

    agent.move_forward(Heading.EAST)
    assert agent.position() == Position(0, 1)
    agent.move_sideways(Heading.EAST)
    assert agent.position() == Position(1, 1)
    assert agent.inspect() is Marker.BLACK_WOOL

    agent.teleport(Position(0, 4), Heading.EAST)
    assert agent.inspect() is Marker.YELLOW_WOOL
    assert agent.moves == 2


def test_agent_can_walk_off_the_grid():
    agent = GridAgent(GridLayout.from_text("+"), heading=Heading.WEST)
    agent.move_forward(agent.heading())
    assert agent.position() == Position(0, -1)
    assert agent.inspect() is Marker.AIR


def test_render_marks_the_agent():
    agent = GridAgent(GridLayout.from_text("+-\n.e"))
    agent.move_forward(Heading.EAST)
    lines = agent.render().splitlines()
    assert lines[0] == " + [-]"
    assert lines[1] == " .  e "
