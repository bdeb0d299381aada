"""
iclock/serialization.py
JSON-ready dicts for parse results (HTTP adapter, CLI --json).
Enums become {"name", "value"}; datetimes become ISO-8601 UTC strings.
"""

from dataclasses import asdict
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict

from iclock.models.record import AttendanceLog, DeviceInfo, ParseResult


def attendance_log_to_dict(log: AttendanceLog) -> Dict[str, Any]:
    return {k: _plain(v) for k, v in asdict(log).items()}


def device_info_to_dict(info: DeviceInfo) -> Dict[str, Any]:
    return asdict(info)


def result_to_dict(result: ParseResult) -> Dict[str, Any]:
    """Convert a ParseResult (single record, record list or DeviceInfo)."""
    return {
        'success':  result.success,
        'data':     _data_to_dict(result.data),
        'error':    result.error,
        'warnings': list(result.warnings) if result.warnings else [],
    }


def _data_to_dict(data):
    if isinstance(data, AttendanceLog):
        return attendance_log_to_dict(data)
    if isinstance(data, DeviceInfo):
        return device_info_to_dict(data)
    if isinstance(data, list):
        return [_data_to_dict(x) for x in data]
    return data


def _plain(value):
    if isinstance(value, IntEnum):
        return {'name': value.name, 'value': int(value)}
    if isinstance(value, datetime):
        return value.isoformat()
    return value
