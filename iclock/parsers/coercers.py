"""
iclock/parsers/coercers.py
Integer and enum coercion for positional ATTLOG fields.

Firmware pads and suffixes numeric fields inconsistently, so integers are
read the lenient way: leading whitespace skipped, optional sign, leading
ASCII digits taken, anything after them ignored ("25abc" -> 25,
"1.5" -> 1). A digit run too long to convert counts as unreadable.

parse_verify_type / parse_in_out_mode return None for anything outside
the closed set so the caller can warn. parse_work_code never returns
None: unknown work codes are plain NORMAL.
"""

import re
from typing import Optional

from iclock.models.enums import (
    IN_OUT_MODE_VALUES,
    VERIFY_TYPE_VALUES,
    WORK_CODE_VALUES,
    InOutMode,
    VerifyType,
    WorkCode,
)

_LEADING_INT = re.compile(r'\s*([+-]?[0-9]+)')

# Longer digit runs read as unparsable (int() rejects past 4300)
MAX_DIGITS = 64


def parse_int(value: Optional[str]) -> Optional[int]:
    """Leading integer of value, or None when there are no digits."""
    if not value:
        return None
    m = _LEADING_INT.match(value)
    if not m:
        return None
    digits = m.group(1)
    if len(digits.lstrip('+-')) > MAX_DIGITS:
        return None
    return int(digits)


def parse_verify_type(value: Optional[str]) -> Optional[VerifyType]:
    num = parse_int(value)
    if num is None or num not in VERIFY_TYPE_VALUES:
        return None
    return VerifyType(num)


def parse_in_out_mode(value: Optional[str]) -> Optional[InOutMode]:
    num = parse_int(value)
    if num is None or num not in IN_OUT_MODE_VALUES:
        return None
    return InOutMode(num)


def parse_work_code(value: Optional[str]) -> WorkCode:
    num = parse_int(value)
    if num is None or num not in WORK_CODE_VALUES:
        return WorkCode.NORMAL
    return WorkCode(num)
