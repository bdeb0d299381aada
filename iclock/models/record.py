"""
iclock/models/record.py
Shared dataclass schema. Parsers, presentation helpers, the HTTP adapter
and the CLI all use these types. Data only, apart from the two
ParseResult constructors.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from iclock.models.enums import InOutMode, VerifyType, WorkCode

T = TypeVar('T')

TIMESTAMP_FORMATS = ('auto', 'iso', 'custom')


@dataclass(frozen=True)
class AttendanceLog:
    """One ATTLOG row."""
    user_id:      str
    timestamp:    datetime          # tz-aware, UTC
    in_out_mode:  InOutMode
    verify_type:  VerifyType
    work_code:    WorkCode       = WorkCode.NORMAL
    device_id:    Optional[int]  = None
    reserved:     Optional[List[str]] = None   # trailing fields 6+, verbatim
    raw:          Optional[str]  = None        # only with include_raw_data


@dataclass(frozen=True)
class DeviceInfo:
    """Snapshot from the INFO query value of /iclock/getrequest."""
    serial_number:  str
    model:          str = ''
    user_count:     int = 0
    fp_count:       int = 0
    record_count:   int = 0
    device_ip:      str = ''
    admin_count:    int = 0
    password_count: int = 0
    card_count:     int = 0
    face_count:     int = 0

    # Only present when INFO carries more than nine segments
    firmware:       Optional[str] = None
    platform:       Optional[str] = None
    finger_ver:     Optional[str] = None
    face_ver:       Optional[str] = None
    push_ver:       Optional[str] = None


@dataclass(frozen=True)
class ParserOptions:
    strict_mode:      bool  = False
    include_raw_data: bool  = False
    timestamp_format: str   = 'auto'   # reserved, no effect on parsing
    timezone_offset:  float = 4        # device clock, hours east of UTC


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    Outcome of a parse call. Either success with data (plus optional
    warnings) or failure with a single error string.
    """
    success:  bool
    data:     Optional[T]         = None
    error:    Optional[str]       = None
    warnings: Optional[List[str]] = None

    @classmethod
    def ok(cls, data: T, warnings: Optional[List[str]] = None) -> 'ParseResult[T]':
        return cls(success=True, data=data, warnings=list(warnings) if warnings else None)

    @classmethod
    def fail(cls, error: str) -> 'ParseResult[T]':
        return cls(success=False, error=error)
