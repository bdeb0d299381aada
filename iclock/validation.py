"""
iclock/validation.py
Re-checks an AttendanceLog built outside the parsers (hand-made, loaded
from storage, deserialized). Reports every violation, not just the first.
"""

from datetime import datetime
from typing import List

from iclock.models.enums import IN_OUT_MODE_VALUES, VERIFY_TYPE_VALUES
from iclock.models.record import AttendanceLog, ParseResult


def validate_attendance_log(log: AttendanceLog) -> ParseResult[AttendanceLog]:
    errors: List[str] = []

    if not isinstance(log.user_id, str) or not log.user_id.strip():
        errors.append("User ID is required")
    # naive datetimes are wall-clock values, not instants
    if not isinstance(log.timestamp, datetime) or log.timestamp.tzinfo is None:
        errors.append("Valid timestamp is required")
    if not _is_member(log.verify_type, VERIFY_TYPE_VALUES):
        errors.append("Invalid verify type")
    if not _is_member(log.in_out_mode, IN_OUT_MODE_VALUES):
        errors.append("Invalid in/out mode")

    if errors:
        return ParseResult.fail(', '.join(errors))
    return ParseResult.ok(log)


def _is_member(value, allowed) -> bool:
    # bool is an int subclass; True must not pass as FINGERPRINT / CHECK_OUT
    return isinstance(value, int) and not isinstance(value, bool) and value in allowed
