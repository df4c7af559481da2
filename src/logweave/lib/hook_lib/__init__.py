"""
hook_lib — ordered hook & middleware pipeline for log records.

A reusable extension layer for a logging façade, providing:
- Per-event hooks (before_log, after_log, on_error) with priorities
- One-shot (once) subscriptions
- Fault isolation: failing hooks are rerouted to on_error
- A global middleware chain with explicit continuation
- Registration stats and bulk reset

Public API:
    HookManager       — registration, emission, process/after_process
    RegistrationStore — priority-ordered hook and middleware buckets
    Subscription      — handle returned by on/once/use
    LogEntry          — typed view of an entry dict
    StackInfo         — call-site location
    KNOWN_EVENTS      — the fixed event vocabulary
    UnknownEventError — raised for names outside it
    LOG_LEVELS        — level name to severity
    should_log        — verbosity gate
"""

from .manager import HookManager
from .registry import (
    RegistrationStore, Subscription, HookRegistration, MiddlewareRegistration,
    DEFAULT_PRIORITY,
)
from .entry import LogEntry, StackInfo
from .events import (
    BEFORE_LOG, AFTER_LOG, ON_ERROR, KNOWN_EVENTS, EVENT_DESCRIPTIONS,
    UnknownEventError, validate_event, format_event_list,
)
from .levels import LOG_LEVELS, VERBOSITIES, level_value, should_log

__all__ = [
    'HookManager',
    'RegistrationStore', 'Subscription', 'HookRegistration',
    'MiddlewareRegistration', 'DEFAULT_PRIORITY',
    'LogEntry', 'StackInfo',
    'BEFORE_LOG', 'AFTER_LOG', 'ON_ERROR', 'KNOWN_EVENTS', 'EVENT_DESCRIPTIONS',
    'UnknownEventError', 'validate_event', 'format_event_list',
    'LOG_LEVELS', 'VERBOSITIES', 'level_value', 'should_log',
]
