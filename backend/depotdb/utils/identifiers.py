from __future__ import annotations

import os
import time
import uuid


def generate_uuid7() -> str:
    """
    Return a UUIDv7 string.

    The leading 48 bits are the creation time in milliseconds, so ids from
    different milliseconds sort by creation. Within one millisecond the
    order is random.
    """
    ts_ms = int(time.time() * 1000)
    raw = bytearray(ts_ms.to_bytes(6, "big", signed=False) + os.urandom(10))
    raw[6] = (raw[6] & 0x0F) | 0x70  # version 7
    raw[8] = (raw[8] & 0x3F) | 0x80  # RFC 4122 variant
    return str(uuid.UUID(bytes=bytes(raw)))
