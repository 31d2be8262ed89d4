from __future__ import annotations

import math
import re

# Plain decimal or exponent literal; no whitespace, underscores, nan or inf.
DECIMAL_LITERAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_decimal(raw: str) -> float:
    if not DECIMAL_LITERAL.fullmatch(raw):
        raise ValueError(f"not a decimal literal: {raw!r}")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"out of range: {raw!r}")
    return value
