"""
LogEntry — the typed view of one record flowing through the pipeline.

Hooks and middleware work on plain dicts (open schema: any extra key is
legal and must survive stages that do not touch it). LogEntry is the
structured form the logging façade builds before processing and reads
back afterwards: a fixed set of known fields plus an ``extra`` bag for
everything else.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class StackInfo:
    """Call-site location attached to a record."""
    file: str
    line: int
    column: Optional[int] = None
    function: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass
class LogEntry:
    """One log record.

    Attributes:
        level: Level name (see levels.LOG_LEVELS)
        message: Primary message text
        args: Every positional argument passed to the log call, in order
        timestamp: ISO-8601 creation time
        prefix: Scope prefix, e.g. 'app:db'
        stack_info: Call-site information, when captured
        correlation_id: Caller-supplied id for tying records together
        context: Free-form mapping of structured data
        extra: Extension fields; flattened into the dict form
    """
    level: str
    message: str
    args: List[Any] = field(default_factory=list)
    timestamp: str = ''
    prefix: Optional[str] = None
    stack_info: Optional[Any] = None
    correlation_id: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def known_keys(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != 'extra']

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  default_level: Optional[str] = None) -> 'LogEntry':
        """Split a flat entry dict into known fields and extension fields.

        Missing 'args' defaults to an empty list, 'timestamp' and
        'message' to '', and 'level' to ``default_level``.

        Raises:
            KeyError: if 'level' is absent and no default_level is given
        """
        known = set(cls.known_keys())
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        kwargs.setdefault('args', [])
        kwargs.setdefault('timestamp', '')
        kwargs.setdefault('message', '')
        kwargs['args'] = list(kwargs['args'] or [])
        if 'level' not in kwargs:
            if default_level is None:
                raise KeyError('level')
            kwargs['level'] = default_level
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Flat dict form handed to hooks. Optional fields left as None are omitted."""
        data: Dict[str, Any] = {
            'level': self.level,
            'message': self.message,
            'args': list(self.args),
            'timestamp': self.timestamp,
        }
        for name in ('prefix', 'stack_info', 'correlation_id', 'context'):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if isinstance(data.get('stack_info'), StackInfo):
            data['stack_info'] = data['stack_info'].to_dict()
        # Extension keys never shadow known fields
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data
