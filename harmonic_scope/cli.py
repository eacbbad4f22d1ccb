"""
harmonic-scope - modular exponentiation sequences as terminal animations.

Commands:
  - menu     : interactive control menu (default)
  - sequence : print base^n mod m up to the first repeated residue
  - frame    : print a single rendered frame at a given time
  - scope    : live full-screen curses viewer

Quick examples
--------------
  harmonic-scope --base 3 --modulus 61
  harmonic-scope --modulus 13 sequence --json
  harmonic-scope --mode plasma frame --time 2.5
  harmonic-scope --mode lissajous scope
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from . import __version__
from .config import (
    CAP_RANGE, DEFAULT_BASE, DEFAULT_MODULUS, DELAY_RANGE_MS, HEIGHT_RANGE,
    PARTIALS_RANGE, Settings, TERM_DELAY_RANGE_MS, WIDTH_RANGE,
)
from .errors import HarmonicScopeError
from .render import RenderMode, render
from .session import Session
from .terminal import format_frame

logger = logging.getLogger("harmonic_scope")


def die(msg: str, code: int = 2) -> None:
    print(f"harmonic-scope: {msg}", file=sys.stderr)
    raise SystemExit(code)


def setup_logging(level: str, log_file: Optional[str]) -> None:
    kwargs = {"filename": log_file} if log_file else {"stream": sys.stderr}
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        **kwargs,
    )


def make_session(args: argparse.Namespace) -> Session:
    try:
        return Session(args.base, args.modulus, Settings.from_args(args))
    except (HarmonicScopeError, ValueError) as e:
        die(str(e))


# -------------------------
# commands
# -------------------------
def cmd_menu(args: argparse.Namespace) -> None:
    from .menu import Menu

    Menu(make_session(args)).run()


def cmd_sequence(args: argparse.Namespace) -> None:
    session = make_session(args)
    seq = session.ensure_sequence()
    if args.json:
        doc = {
            "base": seq.base,
            "modulus": seq.modulus,
            "residues": list(seq.residues),
            "length": len(seq),
            "tail_length": seq.tail_length,
            "period": seq.period,
            "repeat_value": seq.repeat_value,
            "capped": seq.capped,
        }
        sys.stdout.write(json.dumps(doc) + "\n")
        return
    for i, v in seq.terms():
        print(f"Term {i}: {v}")
    if seq.capped:
        print(f"stopped at the safety cap ({session.settings.cap} terms)")
    else:
        print(f"length={len(seq)} tail={seq.tail_length} period={seq.period}")


def cmd_frame(args: argparse.Namespace) -> None:
    session = make_session(args)
    st = session.settings
    frame = render(st.mode, session.ensure_partials(), st.width, st.height, args.time)
    color = st.color and sys.stdout.isatty()
    sys.stdout.write("\n".join(format_frame(frame, color)) + "\n")


def cmd_scope(args: argparse.Namespace) -> None:
    from .scope import main as scope_main

    if not sys.stdout.isatty():
        die("scope requires a TTY stdout (don't redirect output)")
    scope_main(make_session(args))


# -------------------------
# parser
# -------------------------
def _bounded(lo: int, hi: int):
    def parse(s: str) -> int:
        try:
            v = int(s)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not an integer: {s!r}") from None
        if not lo <= v <= hi:
            raise argparse.ArgumentTypeError(f"must be between {lo} and {hi}")
        return v
    return parse


def _unsigned(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {s!r}") from None
    if v < 0:
        raise argparse.ArgumentTypeError("must be a non-negative integer")
    return v


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="harmonic-scope",
                                description="Modular harmonic sequences rendered as ASCII animations")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--base", type=_unsigned, default=DEFAULT_BASE, help=f"Sequence base (default {DEFAULT_BASE})")
    p.add_argument("--modulus", type=_unsigned, default=DEFAULT_MODULUS,
                   help=f"Modulus, must be > 0 (default {DEFAULT_MODULUS})")
    p.add_argument("--width", type=_bounded(*WIDTH_RANGE), help="Canvas width (default 80)")
    p.add_argument("--height", type=_bounded(*HEIGHT_RANGE), help="Canvas height (default 24)")
    p.add_argument("--delay", type=_bounded(*DELAY_RANGE_MS), help="Frame delay in ms (default 50)")
    p.add_argument("--term-delay", type=_bounded(*TERM_DELAY_RANGE_MS),
                   help="Delay between terms when showing a sequence, ms (default 0)")
    p.add_argument("--mode", choices=[m.value for m in RenderMode], help="Render mode (default oscilloscope)")
    p.add_argument("--max-partials", type=_bounded(*PARTIALS_RANGE), help="Partial count limit (default 24)")
    p.add_argument("--cap", type=_bounded(*CAP_RANGE), help="Safety cap on sequence length (default 5000)")
    p.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    p.add_argument("--no-progress", action="store_true", help="Start with the progress display off")
    p.add_argument("--log-level", choices=["debug", "info", "warning", "error"], default="warning")
    p.add_argument("--log-file", default=None, help="Write logs to a file instead of stderr")

    sub = p.add_subparsers(dest="cmd")

    pm = sub.add_parser("menu", help="Interactive control menu (default)")
    pm.set_defaults(func=cmd_menu)

    ps = sub.add_parser("sequence", help="Print the sequence and its cycle structure")
    ps.add_argument("--json", action="store_true", help="Machine-readable output")
    ps.set_defaults(func=cmd_sequence)

    pf = sub.add_parser("frame", help="Print one rendered frame")
    pf.add_argument("--time", type=float, default=0.0, help="Simulated time t in seconds (default 0)")
    pf.set_defaults(func=cmd_frame)

    pc = sub.add_parser("scope", help="Live curses viewer")
    pc.set_defaults(func=cmd_scope)

    p.set_defaults(func=cmd_menu)
    return p


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    logger.debug("command=%s base=%s modulus=%s", args.cmd or "menu", args.base, args.modulus)
    try:
        args.func(args)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
