"""
iclock — parsers for ZKTeco iClock push payloads.

    from iclock import parse_attendance_log, parse_device_info

    result = parse_attendance_log(body)
    if result.success:
        for log in result.data:
            print(format_attendance_log(log))
"""

__version__ = "1.0.0"

from iclock.models import (  # noqa: E402
    AttendanceLog,
    DeviceInfo,
    InOutMode,
    ParseResult,
    ParserOptions,
    VerifyType,
    WorkCode,
)
from iclock.parsers import (  # noqa: E402
    parse_attendance_log,
    parse_device_info,
    parse_single_attendance_record,
    parse_timestamp,
)
from iclock.presentation import (  # noqa: E402
    format_attendance_log,
    get_in_out_mode_name,
    get_verify_type_name,
    is_check_in,
    is_check_out,
)
from iclock.validation import validate_attendance_log  # noqa: E402

__all__ = [
    "AttendanceLog",
    "DeviceInfo",
    "InOutMode",
    "ParseResult",
    "ParserOptions",
    "VerifyType",
    "WorkCode",
    "format_attendance_log",
    "get_in_out_mode_name",
    "get_verify_type_name",
    "is_check_in",
    "is_check_out",
    "parse_attendance_log",
    "parse_device_info",
    "parse_single_attendance_record",
    "parse_timestamp",
    "validate_attendance_log",
    "__version__",
]
