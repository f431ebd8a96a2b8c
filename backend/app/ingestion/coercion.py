"""Raw CSV text → typed scalar.

Precedence is fixed: integer, then float, then boolean, then the untouched
string. Python's own ``int()``/``float()`` are too permissive here (they take
``"1_000"``, ``"nan"``, ``"inf"``), so the numeric shapes are matched first.
"""
import math
import re

TypedScalar = int | float | bool | str

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def coerce(raw: str) -> TypedScalar:
    value = raw.strip()
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        number = float(value)
        # "1e999" overflows to inf; keep it as text like "inf" itself
        if math.isfinite(number):
            return number
        return raw
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return raw
