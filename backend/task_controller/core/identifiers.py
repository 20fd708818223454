"""Identifier Generation — time-ordered UUIDv7 strings for task and tag rows.

Invariants:
    - Layout follows RFC 9562 UUIDv7: 48-bit unix ms | ver 7 | 12-bit rand_a | var 10 | 62-bit rand_b
    - Ids generated by one process are strictly increasing (string and int order agree)
    - Within one millisecond rand_a acts as a counter; on overflow the timestamp is bumped

Design Decisions:
    - stdlib uuid + secrets: the layout is a few shifts, no extra dependency
    - Lock around the counter: ids may be minted from worker threads as well as the event loop
"""

import secrets
import threading
import time
import uuid

_RAND_A_MAX = (1 << 12) - 1
_TIMESTAMP_MASK = (1 << 48) - 1

_lock = threading.Lock()
_last_ms = 0
_last_rand_a = 0


def _next_timestamp_and_counter() -> tuple[int, int]:
    global _last_ms, _last_rand_a
    with _lock:
        now_ms = time.time_ns() // 1_000_000
        if now_ms > _last_ms:
            _last_ms = now_ms
            _last_rand_a = secrets.randbits(11)  # leave headroom for the counter
        elif _last_rand_a < _RAND_A_MAX:
            _last_rand_a += 1
        else:
            _last_ms += 1
            _last_rand_a = 0
        return _last_ms, _last_rand_a


def uuid7() -> uuid.UUID:
    """Return a new UUIDv7."""
    unix_ms, rand_a = _next_timestamp_and_counter()
    value = (unix_ms & _TIMESTAMP_MASK) << 80
    value |= 0x7 << 76
    value |= rand_a << 64
    value |= 0b10 << 62
    value |= secrets.randbits(62)
    return uuid.UUID(int=value)


def new_time_ordered_id() -> str:
    """Return a new row identifier (canonical UUIDv7 string)."""
    return str(uuid7())


def timestamp_ms(identifier: str) -> int:
    """Extract the unix millisecond timestamp embedded in a UUIDv7 string."""
    return uuid.UUID(identifier).int >> 80
