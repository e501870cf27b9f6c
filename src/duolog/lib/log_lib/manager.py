"""
DiagnosticsManager — the context object owning both channels.

A call site supplies (level, message, component) once; the manager fans
it out to the console and file channels, each of which applies its own
enable/filter logic:

    write(INFO, "Loading icon", "App")
        ├── ConsoleChannel: enabled? mask & INFO?  → stdout
        └── FileChannel:    READY?   mask & INFO?  → ~/Documents/Logs/<name>

The manager can be constructed and passed explicitly, or reached through
the module-level singleton (init_diagnostics / get_diagnostics) for code
that has no handle to pass around.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .channels import (
    ConsoleChannel, FileChannel, FileState, WriteResult, report,
)
from .levels import ALL, ERROR, INFO, VERBOSE, WARNING


@dataclass(frozen=True)
class DiagnosticsStatus:
    """Snapshot of both channels' configuration and lifecycle."""
    console_enabled: bool
    console_mask: int
    file_state: FileState
    file_path: Optional[Path]
    file_mask: int

    @property
    def file_ready(self) -> bool:
        return self.file_state is FileState.READY

    def describe(self) -> str:
        """Human-readable multi-line summary (used by `duolog --status`)."""
        return "\n".join([
            f"console: {'enabled' if self.console_enabled else 'disabled'}"
            f" (mask={int(self.console_mask)})",
            f"file:    {self.file_state.value}"
            f" (mask={int(self.file_mask)})",
            f"path:    {self.file_path if self.file_path else '-'}",
        ])


class DiagnosticsManager:
    """Central coordinator for the console and file channels.

    The public entry points never raise. Writes return the pair of
    per-channel results for callers that care; most ignore it.

    Usage::

        diag = DiagnosticsManager()
        diag.initialize_console(sys.argv[1:])
        diag.initialize_file("myapp.log")
        diag.set_console_filter(ERROR | WARNING)
        diag.write(INFO, "Starting", "App")
        diag.write_exception(exc)
    """

    def __init__(self, console: ConsoleChannel = None,
                 file: FileChannel = None):
        self.console = console if console is not None else ConsoleChannel()
        self.file = file if file is not None else FileChannel()

    # -- lifecycle ----------------------------------------------------------

    def initialize_console(self, args: Optional[Sequence[str]]) -> bool:
        """Scan startup arguments for the debug token. Returns enabled flag."""
        return self.console.initialize(args)

    def initialize_file(self, file_name) -> FileState:
        """Prepare (and truncate) the log file. Returns the resulting state."""
        return self.file.initialize(file_name)

    def set_console_filter(self, mask) -> None:
        self.console.set_filter(mask)

    def set_file_filter(self, mask) -> None:
        self.file.set_filter(mask)

    def status(self) -> DiagnosticsStatus:
        return DiagnosticsStatus(
            console_enabled=self.console.enabled,
            console_mask=self.console.mask,
            file_state=self.file.state,
            file_path=self.file.path,
            file_mask=self.file.mask,
        )

    def active(self, level) -> bool:
        """True if at least one channel would emit a record at `level`.

        Used by callers to skip building expensive messages.
        """
        return self.console.admits(level) or self.file.admits(level)

    # -- writing ------------------------------------------------------------

    def write(self, level, message, component) -> Tuple[WriteResult, WriteResult]:
        """Send one record to both channels.

        Returns:
            (console_result, file_result)
        """
        return (
            self._guarded(self.console.write, level, message, component),
            self._guarded(self.file.write, level, message, component),
        )

    def write_exception(self, exc) -> Tuple[WriteResult, WriteResult]:
        """Send an exception trace to both channels (gated on ERROR)."""
        return (
            self._guarded(self.console.write_exception, exc),
            self._guarded(self.file.write_exception, exc),
        )

    def error(self, message, component):
        return self.write(ERROR, message, component)

    def warning(self, message, component):
        return self.write(WARNING, message, component)

    def info(self, message, component):
        return self.write(INFO, message, component)

    def verbose(self, message, component):
        return self.write(VERBOSE, message, component)

    @staticmethod
    def _guarded(func, *args) -> WriteResult:
        # Channels are duck-typed; a replacement that raises must not
        # take the host application down with it.
        try:
            return func(*args)
        except Exception as e:
            report(f"Diagnostics channel failed: {e}")
            return WriteResult.failure(str(e))


# =============================================================================
# Module-level singleton
# =============================================================================

_manager: Optional[DiagnosticsManager] = None


def init_diagnostics(args: Optional[Sequence[str]] = None,
                     log_file: Optional[str] = None,
                     console_mask=ALL, file_mask=ALL,
                     log_dir=None) -> DiagnosticsManager:
    """Build, configure and install the module-level DiagnosticsManager.

    Call once at program startup.

    Args:
        args: Startup arguments scanned for the debug token
        log_file: Log file name; None leaves the file channel UNINITIALIZED
        console_mask: Initial console filter
        file_mask: Initial file filter
        log_dir: Override for the log directory (default ~/Documents/Logs)

    Returns:
        The installed DiagnosticsManager
    """
    global _manager

    manager = DiagnosticsManager(
        console=ConsoleChannel(mask=console_mask),
        file=FileChannel(log_dir=log_dir, mask=file_mask),
    )
    manager.initialize_console(args)
    if log_file:
        manager.initialize_file(log_file)

    _manager = manager
    return _manager


def get_diagnostics() -> DiagnosticsManager:
    """Get the module-level DiagnosticsManager, creating a default if needed.

    The default has a disabled console and an uninitialized file channel,
    so writes through it are silent until configured.
    """
    global _manager
    if _manager is None:
        _manager = DiagnosticsManager()
    return _manager


def set_diagnostics(manager: Optional[DiagnosticsManager]) -> None:
    """Install an explicitly constructed manager (None resets to default)."""
    global _manager
    _manager = manager

