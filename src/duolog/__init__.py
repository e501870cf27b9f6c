"""duolog — dual-channel, severity-filtered diagnostics.

One record, two independently filtered sinks: an interactive console
(enabled by a -debug startup token) and a log file under
~/Documents/Logs that is truncated at startup and appended per write.
"""

from duolog._version import __version__, __app_name__

__all__ = ["__version__", "__app_name__"]
