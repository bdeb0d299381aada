"""
iclock/models/enums.py
Closed code sets used by ZKTeco iClock firmware in ATTLOG rows.
Integer-backed so raw device values compare equal to members.
"""

from enum import IntEnum


class VerifyType(IntEnum):
    """How the user authenticated at the terminal."""
    UNKNOWN     = 0
    FINGERPRINT = 1
    PASSWORD    = 2
    CARD        = 3
    FACE        = 15
    PALM        = 25


class InOutMode(IntEnum):
    """Punch state selected on the terminal keypad."""
    CHECK_IN     = 0
    CHECK_OUT    = 1
    BREAK_OUT    = 2
    BREAK_IN     = 3
    OVERTIME_IN  = 4
    OVERTIME_OUT = 5


class WorkCode(IntEnum):
    NORMAL   = 0
    OVERTIME = 1
    HOLIDAY  = 2
    WEEKEND  = 3


# Membership sets for coercion and validation.
VERIFY_TYPE_VALUES  = frozenset(int(m) for m in VerifyType)
IN_OUT_MODE_VALUES  = frozenset(int(m) for m in InOutMode)
WORK_CODE_VALUES    = frozenset(int(m) for m in WorkCode)
