"""
Event vocabulary for the hook pipeline.

The set of lifecycle events is fixed. Hooks subscribe to exactly one of
these names; registering for (or emitting) anything else fails fast
instead of quietly creating a new bucket.

Lifecycle of one log call:
    before_log  ──→  middleware chain  ──→  (record emitted)  ──→  after_log
                 ╲                                             ╱
                  ╲──────────  on_error (hook failures)  ─────╱
"""

from typing import Dict, Tuple


BEFORE_LOG = 'before_log'
AFTER_LOG = 'after_log'
ON_ERROR = 'on_error'

# Ordered: the order here is the order get_stats() reports buckets in
KNOWN_EVENTS: Tuple[str, ...] = (BEFORE_LOG, AFTER_LOG, ON_ERROR)

EVENT_DESCRIPTIONS: Dict[str, str] = {
    BEFORE_LOG: 'Before a record is formatted (hooks may rewrite it)',
    AFTER_LOG:  'After a record reached its sinks (observation only)',
    ON_ERROR:   'A hook callback raised while handling another event',
}


class UnknownEventError(ValueError):
    """Raised when an event name is outside the fixed vocabulary."""

    def __init__(self, event):
        self.event = event
        known = ', '.join(KNOWN_EVENTS)
        super().__init__(f"Unknown hook event {event!r} (expected one of: {known})")


def validate_event(event: str) -> str:
    """Return ``event`` unchanged if it is a known event name.

    Raises:
        UnknownEventError: if the name is not in KNOWN_EVENTS
    """
    if event not in KNOWN_EVENTS:
        raise UnknownEventError(event)
    return event


def format_event_list() -> str:
    """Format the event vocabulary for display."""
    lines = ["Hook events:"]
    width = max(len(name) for name in KNOWN_EVENTS)
    for name in KNOWN_EVENTS:
        lines.append(f"  {name:<{width}}  {EVENT_DESCRIPTIONS[name]}")
    return "\n".join(lines)
