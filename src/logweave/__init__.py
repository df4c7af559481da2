"""logweave — console logging with an ordered hook & middleware pipeline.

Every record passes through before_log hooks and a middleware chain
before it is written, and through after_log hooks afterwards.
"""

from logweave._version import __version__, __app_name__
from logweave.lib.hook_lib import HookManager, LogEntry, Subscription
from logweave.output import Logger, create_logger

__all__ = [
    "__version__", "__app_name__",
    "HookManager", "LogEntry", "Subscription",
    "Logger", "create_logger",
]
