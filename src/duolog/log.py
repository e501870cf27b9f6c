"""Module-level diagnostics API for duolog.

Thin proxies over the DiagnosticsManager singleton, so call sites can
log without holding a manager:

    from duolog import log
    log.initialize_console(sys.argv[1:])
    log.initialize_file("myapp.log")
    log.info("Starting", "App")

Also re-exports the log_lib public API for convenience imports.
"""

# Re-export log_lib public API — one-stop import for call sites
from duolog.lib.log_lib import (                     # noqa: F401
    SeverityLevel, ALL, NONE, ERROR, WARNING, INFO, VERBOSE,
    admits, parse_level_spec,
    DiagnosticsManager, init_diagnostics, get_diagnostics, set_diagnostics,
    FileState, WriteResult,
    trace,
)


def initialize_console(args):
    """Enable the console channel if args carry the -debug token."""
    return get_diagnostics().initialize_console(args)


def initialize_file(file_name):
    """Prepare ~/Documents/Logs/<file_name>, truncating it."""
    return get_diagnostics().initialize_file(file_name)


def set_console_filter(mask):
    get_diagnostics().set_console_filter(mask)


def set_file_filter(mask):
    get_diagnostics().set_file_filter(mask)


def write(level, message, component):
    """Send a record to both channels. Never raises."""
    return get_diagnostics().write(level, message, component)


def write_exception(exc):
    """Send an exception trace to both channels. Never raises."""
    return get_diagnostics().write_exception(exc)


def error(message, component):
    return write(ERROR, message, component)


def warning(message, component):
    return write(WARNING, message, component)


def info(message, component):
    return write(INFO, message, component)


def verbose(message, component):
    return write(VERBOSE, message, component)
