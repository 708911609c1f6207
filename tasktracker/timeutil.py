import threading
from datetime import datetime, timedelta, timezone

_lock = threading.Lock()
_last = None


def utcnow():
    """Naive UTC timestamp, strictly greater than any value previously returned."""
    global _last
    with _lock:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        if _last is not None and now <= _last:
            now = _last + timedelta(microseconds=1)
        _last = now
        return now


def to_naive_utc(value):
    if value is None or value.tzinfo is None:
        return value
    try:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    except OverflowError as exc:
        raise ValueError(f'{value.isoformat()} is out of range once converted to UTC') from exc


def to_iso(value):
    """Render a stored (naive UTC) timestamp as ISO-8601 with a Z suffix."""
    if value is None:
        return None
    return to_naive_utc(value).isoformat() + 'Z'
