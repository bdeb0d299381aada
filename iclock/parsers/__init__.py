"""
iclock/parsers — ATTLOG and device-info parsing. Every entry point returns
a ParseResult and never raises.
"""

from iclock.parsers.attlog_parser import (
    parse_attendance_log,
    parse_single_attendance_record,
    resolve_options,
)
from iclock.parsers.device_info_parser import parse_device_info
from iclock.parsers.timestamp import parse_timestamp

__all__ = [
    "parse_attendance_log",
    "parse_device_info",
    "parse_single_attendance_record",
    "parse_timestamp",
    "resolve_options",
]
