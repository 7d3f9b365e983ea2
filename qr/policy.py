"""
Visit deduplication and the bounded visit log.

Pure functions: no database access and no clock. Callers pass ``now`` and the
current log (newest first) explicitly.
"""
from collections import namedtuple
from datetime import timedelta

DEDUP_WINDOW = timedelta(hours=24)
MAX_RECENT_VISITS = 100
UNKNOWN_USER_AGENT = 'Unknown'

Visit = namedtuple('Visit', ['visitor_ip', 'user_agent', 'timestamp'])


def is_duplicate_visit(visits, visitor_ip, now, window=DEDUP_WINDOW):
    """True if ``visitor_ip`` already visited within the trailing window.

    Only the IP is compared. A record exactly ``window`` old no longer counts.
    """
    threshold = now - window
    return any(
        v.visitor_ip == visitor_ip and v.timestamp > threshold
        for v in visits
    )


def plan_insert(visits, incoming, capacity=MAX_RECENT_VISITS):
    """Decide how ``incoming`` enters a log capped at ``capacity``.

    ``visits`` must be ordered newest first. Returns ``(store, evicted)``:
    whether the incoming record is kept, and the existing records to drop so
    the log keeps only the ``capacity`` most recent entries. On equal
    timestamps the incoming record ranks after the existing ones.
    """
    if len(visits) < capacity:
        return True, []

    # position the incoming record would take in the newest-first log
    position = sum(1 for v in visits if v.timestamp >= incoming.timestamp)
    if position >= capacity:
        return False, list(visits[capacity:])
    return True, list(visits[capacity - 1:])
