"""Conversion between integer seconds and Vault duration strings."""

from __future__ import annotations

import re

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h|d)")


def to_duration(seconds: int | None) -> str:
    """Render *seconds* the way Vault expects a TTL, e.g. ``"3600s"``.

    ``None`` renders as ``"0s"``, which Vault reads as "use the system default".
    """
    return "%ds" % (seconds or 0)


def parse_duration(value: int | str | None) -> int:
    """Parse a TTL as returned by Vault into whole seconds.

    Vault reports mount TTLs as integer seconds, but older servers and
    tune responses may use Go duration strings (``"768h"``, ``"1h30m"``).

    Raises:
        ValueError: If *value* is neither.
    """
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)

    text = value.strip()
    if text.isdigit():
        return int(text)

    pos = 0
    total = 0.0
    for match in _COMPONENT.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return int(total)
