"""Parsing helpers for command line values."""

import re

__all__ = ["parse_count", "sparse_range"]

SI_PREFIXES = {"k": 1000, "m": 1000**2, "g": 1000**3, "t": 1000**4}
IEC_PREFIXES = {"ki": 1024, "mi": 1024**2, "gi": 1024**3, "ti": 1024**4}


def parse_count(value: str | None) -> int | None:
    """Parse an iteration count with optional SI/IEC prefix.

    Supports:
    - Plain numbers: 1000, 1_000_000
    - SI prefixes: k, m, g, t (powers of 1000)
    - IEC prefixes: ki, mi, gi, ti (powers of 1024)
    - Case insensitive

    Examples: 500, 10k, 1.5m, 1g, 64ki
    """
    if value is None:
        return None
    s = value.strip().lower().replace("_", "")

    # Try IEC first (ki, mi, etc.) - must check before SI
    m = re.match(r"^(\d+(?:\.\d+)?)\s*(ki|mi|gi|ti)$", s)
    if m:
        num, prefix = m.groups()
        return int(float(num) * IEC_PREFIXES[prefix])

    m = re.match(r"^(\d+(?:\.\d+)?)\s*([kmgt])$", s)
    if m:
        num, prefix = m.groups()
        return int(float(num) * SI_PREFIXES[prefix])

    m = re.match(r"^(\d+)$", s)
    if m:
        return int(m.group(1))

    raise ValueError(f"Invalid count format: {value}")


def sparse_range(n: int, max_items: int = 6) -> list[int]:
    """Roughly geometric sample sizes from 1 to n for benchmark rows."""
    if n < 1:
        return [1]
    out = []
    v = 1
    while v < n and len(out) < max_items - 1:
        out.append(v)
        v *= 10
    out.append(n)
    return out
