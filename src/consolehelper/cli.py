"""CLI interface for consolehelper."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .colors import color_scope, exit_error
from .config import setup_logging
from .interaction import wait
from .layout import format_wrapped, split_lines
from .terminal import get_terminal
from .writer import write_wrapped

EXIT_USAGE = 2


def cmd_wrap(args) -> int:
    """Wrap a file or stdin to the window width."""
    term = get_terminal()

    if args.file:
        path = Path(args.file)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return exit_error(f"Error: Cannot read {path}: {e}", EXIT_USAGE, term)
    else:
        text = sys.stdin.read()

    # Trailing newline would add an empty wrapped line
    if text.endswith("\n"):
        text = text[:-1]

    if args.width is not None:
        for line in split_lines(text):
            term.write(format_wrapped(line, args.width, args.table))
    else:
        write_wrapped(text, table_mode=args.table, term=term)
    return 0


def cmd_wait(args) -> int:
    """Wait for a key press or a timeout."""
    wait(args.message, timeout=args.timeout, show_dots=args.dots)
    return 0


def cmd_probe(args) -> int:
    """Report what consolehelper detected about the current session."""
    term = get_terminal()

    def report(label: str, value) -> None:
        term.write(f"{label:<20}")
        with color_scope("cyan", term):
            term.write_line(str(value))

    report("input redirected", term.input_redirected)
    report("output redirected", term.output_redirected)
    report("interactive", term.is_interactive)
    report("window width", term.window_width)
    report("debugger attached", term.debugger_attached())
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="consolehelper",
        description="consolehelper: redirection-aware console output and waits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"consolehelper {__version__}")
    parser.add_argument("--debug", action="store_true", help="Write debug log to the config dir")

    subparsers = parser.add_subparsers(dest="command")

    # wrap
    wrap_p = subparsers.add_parser("wrap", help="Wrap text to the window width")
    wrap_p.add_argument("file", nargs="?", help="File to wrap (reads stdin if omitted)")
    wrap_p.add_argument("--table", action="store_true",
                        help="Indent wrapped lines to the last double space")
    wrap_p.add_argument("--width", type=int, help="Wrap to a fixed width")
    wrap_p.set_defaults(func=cmd_wrap)

    # wait
    wait_p = subparsers.add_parser("wait", help="Wait for a key press")
    wait_p.add_argument("--message", help="Message to show (default: Press any key to continue...)")
    wait_p.add_argument("--timeout", type=int, default=-1,
                        help="Seconds until the wait ends by itself (default: no limit)")
    wait_p.add_argument("--dots", action="store_true", help="Count the timeout down with dots")
    wait_p.set_defaults(func=cmd_wait)

    # probe
    probe_p = subparsers.add_parser("probe", help="Show redirection and terminal details")
    probe_p.set_defaults(func=cmd_probe)

    return parser


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_terminal().config
    log_path = setup_logging(args.debug or config.get("debug", False))
    if log_path is not None and args.debug:
        print(f"Debug log: {log_path}", file=sys.stderr)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(EXIT_USAGE)

    try:
        sys.exit(args.func(args))
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
