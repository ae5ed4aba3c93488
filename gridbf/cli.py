#!/usr/bin/env python3
"""
Command line host for spatial Brainfuck layouts.

    gridbf programs/multiply.txt --run
    gridbf programs/echo.yaml --numeric

After loading, commands are read from stdin one per line (iotoggle,
debugtoggle, reset, input <val>, run, quit).
"""

import argparse
import logging
import sys
from typing import List, Optional

from .brainfuck import BrainfuckInterpreter
from .commands import CommandHost
from .config import load_config
from .debugger import StepTracer
from .diagnostics import ConsoleDiagnostics
from .io_bridge import ConsoleIO, InputMailbox
from .layout import GridAgent, load_layout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Brainfuck program laid out on a grid of markers.")
    parser.add_argument("layout", help="layout file (.yaml/.yml marker grid, anything else is glyph text)")
    parser.add_argument("--env-file", default=None, help="read settings from this .env file")
    parser.add_argument("--numeric", action="store_true", help="start in numeric I/O mode")
    parser.add_argument("--debug", action="store_true", help="start with debug mode on")
    parser.add_argument("--trace", action="store_true", help="show a tape window with each debug record")
    parser.add_argument("--run", action="store_true", help="start running immediately")
    parser.add_argument("--show", action="store_true", help="print the layout and exit")
    parser.add_argument("--no-color", action="store_true", help="plain console output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.env_file)
    except ValueError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1
    if args.numeric:
        config.io_char = False
    if args.debug:
        config.debug_mode = True
    if args.no_color:
        config.color = False

    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        layout = load_layout(args.layout)
    except (OSError, ValueError) as e:
        print(f"❌ Could not load layout {args.layout}: {e}", file=sys.stderr)
        return 1

    if args.show:
        print(GridAgent(layout).render())
        return 0

    diagnostics = ConsoleDiagnostics(color=config.color)
    mailbox = InputMailbox(config.input_poll_interval)
    interpreter = BrainfuckInterpreter(ConsoleIO(diagnostics, mailbox), diagnostics, config)
    if args.trace:
        StepTracer(interpreter).attach()
    host = CommandHost(interpreter, lambda: GridAgent(layout), mailbox)

    print(f"🧠 Loaded {args.layout} ({layout.shape[0]}x{layout.shape[1]})")
    print("Commands: iotoggle, debugtoggle, reset, input <val>, run, quit")
    if args.run:
        host.execute("run")

    for line in sys.stdin:
        if line.strip().lower() in ("quit", "exit"):
            break
        host.execute(line)

    # stdin is gone, so a program still waiting for input can never get it
    while host.busy:
        if mailbox.waiting:
            host.stop()
        host.wait(0.1)
    result = host.last_result
    if result is None or result.ok:
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
