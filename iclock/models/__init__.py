"""
iclock/models — record types and code sets shared across the package.
"""

from iclock.models.enums import (
    IN_OUT_MODE_VALUES,
    VERIFY_TYPE_VALUES,
    WORK_CODE_VALUES,
    InOutMode,
    VerifyType,
    WorkCode,
)
from iclock.models.record import (
    AttendanceLog,
    DeviceInfo,
    ParseResult,
    ParserOptions,
)

__all__ = [
    "AttendanceLog",
    "DeviceInfo",
    "IN_OUT_MODE_VALUES",
    "InOutMode",
    "ParseResult",
    "ParserOptions",
    "VERIFY_TYPE_VALUES",
    "VerifyType",
    "WORK_CODE_VALUES",
    "WorkCode",
]
