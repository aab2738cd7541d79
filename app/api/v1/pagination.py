import re
from typing import Optional

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')

MAX_LIMIT = 1000
# Keeps OFFSET within a signed 32-bit bind value.
MAX_OFFSET = 2**31 - 1


def parse_int(value: Optional[str], default: int) -> int:
    """Parse the leading integer of ``value``; anything unparseable yields ``default``."""
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    return int(match.group(1))


def resolve_page(limit: Optional[str], offset: Optional[str], default_limit: int) -> tuple[int, int]:
    limit_value = min(parse_int(limit, default_limit), MAX_LIMIT)
    offset_value = min(max(parse_int(offset, 0), 0), MAX_OFFSET)
    return limit_value, offset_value
