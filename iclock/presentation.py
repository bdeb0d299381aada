"""
iclock/presentation.py
Display names, punch classification and a one-line console format
for attendance records.
"""

from typing import Dict

from iclock.models.enums import InOutMode, VerifyType
from iclock.models.record import AttendanceLog

VERIFY_TYPE_NAMES: Dict[int, str] = {
    VerifyType.UNKNOWN:     'Unknown',
    VerifyType.FINGERPRINT: 'Fingerprint',
    VerifyType.PASSWORD:    'Password',
    VerifyType.CARD:        'Card/RFID',
    VerifyType.FACE:        'Face Recognition',
    VerifyType.PALM:        'Palm Recognition',
}

IN_OUT_MODE_NAMES: Dict[int, str] = {
    InOutMode.CHECK_IN:     'Check In',
    InOutMode.CHECK_OUT:    'Check Out',
    InOutMode.BREAK_OUT:    'Break Out',
    InOutMode.BREAK_IN:     'Break In',
    InOutMode.OVERTIME_IN:  'Overtime In',
    InOutMode.OVERTIME_OUT: 'Overtime Out',
}

DIRECTION_MARKS: Dict[int, str] = {
    InOutMode.CHECK_IN:  '→',
    InOutMode.CHECK_OUT: '←',
    InOutMode.BREAK_OUT: '⤴',
    InOutMode.BREAK_IN:  '⤵',
}
OVERTIME_MARK = '⚡'

CHECK_IN_MODES  = frozenset({InOutMode.CHECK_IN, InOutMode.BREAK_IN, InOutMode.OVERTIME_IN})
CHECK_OUT_MODES = frozenset({InOutMode.CHECK_OUT, InOutMode.BREAK_OUT, InOutMode.OVERTIME_OUT})

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_verify_type_name(verify_type: int) -> str:
    """e.g. 25 -> 'Palm Recognition'; unmapped -> 'Unknown (<value>)'."""
    name = VERIFY_TYPE_NAMES.get(verify_type)
    return name if name is not None else f"Unknown ({_raw(verify_type)})"


def get_in_out_mode_name(mode: int) -> str:
    name = IN_OUT_MODE_NAMES.get(mode)
    return name if name is not None else f"Unknown ({_raw(mode)})"


def is_check_in(log: AttendanceLog) -> bool:
    return log.in_out_mode in CHECK_IN_MODES


def is_check_out(log: AttendanceLog) -> bool:
    return log.in_out_mode in CHECK_OUT_MODES


def format_attendance_log(log: AttendanceLog) -> str:
    """
    Single console line, e.g.
    → User 11 | 📅 2025-08-27 10:57:49 | 🔐 Palm Recognition | 📍 Check In | 🖥️ Device 1
    Time is rendered on the local clock of the process.
    """
    direction = DIRECTION_MARKS.get(log.in_out_mode, OVERTIME_MARK)
    parts = [
        f"{direction} User {log.user_id}",
        f"📅 {log.timestamp.astimezone().strftime(DATE_FORMAT)}",
        f"🔐 {get_verify_type_name(log.verify_type)}",
        f"📍 {get_in_out_mode_name(log.in_out_mode)}",
    ]
    if log.device_id is not None:
        parts.append(f"🖥️ Device {log.device_id}")
    return ' | '.join(parts)


def _raw(value) -> str:
    # IntEnum str() differs across Python versions; show the number
    try:
        return str(int(value))
    except (TypeError, ValueError):
        return str(value)
