"""Small helpers shared by the file format modules."""

from __future__ import annotations


def parse_cstring(data: bytes) -> str:
    """Decode a NUL-terminated byte string, replacing invalid UTF-8."""
    raw = bytes(data)
    end = raw.find(b"\x00")
    if end != -1:
        raw = raw[:end]
    return raw.decode("utf-8", errors="replace")