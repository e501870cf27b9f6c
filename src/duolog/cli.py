"""Main CLI entry point for duolog.

Implements a two-pass argument parser:
  1. First pass: pull the case-insensitive -debug token from anywhere in
     argv (argparse would read it as a bundle of short flags)
  2. Second pass: parse the remaining flags and message words

Start-up sequence, shared by every run:
  initialize console → initialize file → apply filters →
  "Starting <name> <version>" → the user's message, if any

Examples:
  duolog -debug "cache warmed"                 # console + file
  duolog --level error --component Loader boom # file only
  duolog -DEBUG --console-filter error|warning --status
"""

import argparse
import sys

from duolog._version import BASE_VERSION, VERSION
from duolog.config import resolve_settings
from duolog.lib.log_lib import (
    CONCRETE_LEVELS, ConsoleChannel, format_level_list, init_diagnostics,
    parse_level_spec,
)


STARTUP_COMPONENT = "App"


def _extract_debug_flag(argv):
    """First pass: split the debug token out of argv.

    Returns (debug_present, remaining_argv).
    """
    token = ConsoleChannel.DEBUG_TOKEN
    remaining = [a for a in argv if a.lower() != token]
    return len(remaining) != len(argv), remaining


def _build_parser():
    """Build the argparse parser for everything but the debug token."""
    parser = argparse.ArgumentParser(
        prog="duolog",
        description="duolog — dual-channel diagnostics (console + log file)",
        epilog=(
            "Pass -debug (any case, anywhere) to enable the console channel.\n"
            "Filter specs: all, none, or names joined by '|' or ','\n"
            "(e.g. error|warning). Run --show-levels for the list."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"duolog {BASE_VERSION} ({VERSION})",
    )
    parser.add_argument("--log-file", metavar="NAME", default=None,
                        help="Log file name under the log directory "
                             "(default: duolog.log)")
    parser.add_argument("--log-dir", metavar="PATH", default=None,
                        help="Log directory (default: ~/Documents/Logs)")
    parser.add_argument("--console-filter", metavar="SPEC", default=None,
                        help="Levels admitted on the console (default: all)")
    parser.add_argument("--file-filter", metavar="SPEC", default=None,
                        help="Levels admitted in the log file (default: all)")
    parser.add_argument("--level", metavar="LEVEL", default="info",
                        help="Level of the message (default: info)")
    parser.add_argument("--component", metavar="NAME",
                        default=STARTUP_COMPONENT,
                        help=f"Component tag of the message "
                             f"(default: {STARTUP_COMPONENT})")
    parser.add_argument("--show-levels", action="store_true", default=False,
                        help="List severity levels and exit")
    parser.add_argument("--status", action="store_true", default=False,
                        help="Print channel status after logging")
    parser.add_argument("message", nargs="*",
                        help="Message words to log")
    return parser


def _parse_single_level(spec):
    level = parse_level_spec(spec)
    if level not in CONCRETE_LEVELS:
        raise ValueError(f"--level needs exactly one level, got {spec!r}")
    return level


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for duolog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 2 = bad filter/level spec).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: the debug token may sit anywhere
    _, remaining = _extract_debug_flag(argv)

    # Pass 2: regular flags
    parser = _build_parser()
    args = parser.parse_args(remaining)

    if args.show_levels:
        print(format_level_list())
        return 0

    settings = resolve_settings({
        "app.log_name": args.log_file,
        "console.filter": args.console_filter,
        "file.filter": args.file_filter,
    })

    try:
        console_mask = parse_level_spec(settings.get("console.filter"))
        file_mask = parse_level_spec(settings.get("file.filter"))
        level = _parse_single_level(args.level)
    except ValueError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return 2

    diag = init_diagnostics(
        args=argv,
        log_file=settings.get("app.log_name"),
        console_mask=console_mask,
        file_mask=file_mask,
        log_dir=args.log_dir,
    )

    try:
        diag.info(f"Starting {settings.get('app.name')} "
                  f"{settings.get('app.version')}", STARTUP_COMPONENT)
        if args.message:
            diag.write(level, " ".join(args.message), args.component)
        if args.status:
            print(diag.status().describe())
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
