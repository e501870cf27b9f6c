"""
log_lib — dual-channel, severity-filtered diagnostics.

A reusable diagnostics library providing:
- Bit-flag severity levels (a mask admits an arbitrary subset)
- A console channel, off until enabled by a startup token
- A file channel, truncated on initialize and appended per write
- A manager that fans one record out to both channels
- Function tracing decorator

Public API:
    DiagnosticsManager — central coordinator (context object)
    init_diagnostics   — singleton initialization
    get_diagnostics    — access singleton
    set_diagnostics    — inject a manager
    ConsoleChannel     — stdout/stderr sink
    FileChannel        — log file sink
    FileState          — file channel lifecycle
    WriteResult        — per-write outcome
    SeverityLevel      — level flags (plus ALL, NONE, ERROR, ...)
    admits             — mask/level test
    parse_level_spec   — parse "error|warning" style specs
    format_line        — shared line grammar
    trace              — function tracing decorator
"""

from .levels import (
    SeverityLevel, CONCRETE_LEVELS, ALL, NONE, ERROR, WARNING, INFO, VERBOSE,
    admits, level_name, parse_level_spec, format_level_list,
)
from .formatting import (
    ExceptionRecord, format_exception_lines, format_line, timestamp,
)
from .channels import (
    ConsoleChannel, FileChannel, FileState, WriteResult, default_log_dir,
)
from .manager import (
    DiagnosticsManager, DiagnosticsStatus,
    init_diagnostics, get_diagnostics, set_diagnostics,
)
from .trace import trace

__all__ = [
    'SeverityLevel', 'CONCRETE_LEVELS', 'ALL', 'NONE',
    'ERROR', 'WARNING', 'INFO', 'VERBOSE',
    'admits', 'level_name', 'parse_level_spec', 'format_level_list',
    'ExceptionRecord', 'format_exception_lines', 'format_line', 'timestamp',
    'ConsoleChannel', 'FileChannel', 'FileState', 'WriteResult',
    'default_log_dir',
    'DiagnosticsManager', 'DiagnosticsStatus',
    'init_diagnostics', 'get_diagnostics', 'set_diagnostics',
    'trace',
]
