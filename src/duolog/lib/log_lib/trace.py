"""
Function tracing decorator.

Routes entry/exit lines through the DiagnosticsManager singleton at
VERBOSE, tagged with the traced function's module as the component.
"""

import functools
import inspect
from pathlib import Path

from .levels import VERBOSE


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(func):
    """Decorator to trace function calls via the DiagnosticsManager.

    Shows function entry/exit with arguments and return values when
    either channel admits VERBOSE. Exceptions are traced and re-raised.
    """
    module = inspect.getmodule(func)
    module_name = module.__name__ if module else "unknown"
    func_name = func.__qualname__
    is_method = '.' in func_name and '<locals>' not in func_name

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_diagnostics

        diag = get_diagnostics()
        if not diag.active(VERBOSE):
            return func(*args, **kwargs)

        args_repr = []
        remaining = args
        if is_method and args:
            args_repr.append('self')
            remaining = args[1:]
        args_repr.extend(_short_repr(a) for a in remaining)
        args_repr.extend(f"{k}={_short_repr(v)}" for k, v in kwargs.items())

        diag.verbose(f">> {module_name}.{func_name}({', '.join(args_repr)})",
                     module_name)
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            diag.verbose(f"!! {module_name}.{func_name} raised: "
                         f"{type(e).__name__}: {e}", module_name)
            raise

        if result is not None:
            diag.verbose(f"<< {module_name}.{func_name} returned: "
                         f"{_short_repr(result)}", module_name)
        return result

    return wrapper
