"""
iclock/parsers/attlog_parser.py
Parses ATTLOG bodies POSTed by ZKTeco terminals to /iclock/cdata?table=ATTLOG.

Row layout (tab-separated):
    0 user id | 1 timestamp | 2 in/out mode | 3 verify type
    4 work code | 5 device id | 6+ reserved (firmware specific)

Fields 0-3 are mandatory. A bad row never aborts a batch unless
strict_mode is set; unknown mode / verify values are defaulted with a
warning rather than rejected.
"""

import logging
from collections.abc import Mapping
from dataclasses import fields
from typing import Any, List, Optional, Union

from iclock.models.enums import InOutMode, VerifyType
from iclock.models.record import TIMESTAMP_FORMATS, AttendanceLog, ParseResult, ParserOptions
from iclock.parsers.coercers import parse_in_out_mode, parse_int, parse_verify_type, parse_work_code
from iclock.parsers.timestamp import parse_timestamp

logger = logging.getLogger(__name__)

MIN_FIELDS = 4

# camelCase keys as sent by JS/JSON callers
_OPTION_ALIASES = {
    'strictMode':      'strict_mode',
    'includeRawData':  'include_raw_data',
    'timestampFormat': 'timestamp_format',
    'timezoneOffset':  'timezone_offset',
}
_OPTION_FIELDS = {f.name for f in fields(ParserOptions)}

OptionsLike = Union[ParserOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None) -> ParserOptions:
    """
    Accept ParserOptions, a plain dict (snake_case or camelCase keys) or None.
    Unknown keys are ignored. Raises ValueError/TypeError on unusable values.
    """
    if options is None:
        return ParserOptions()
    if isinstance(options, ParserOptions):
        return options
    if not isinstance(options, Mapping):
        raise TypeError(f"options must be ParserOptions or a mapping, not {type(options).__name__}")

    kwargs = {}
    for key, value in options.items():
        name = _OPTION_ALIASES.get(key, key)
        if name in _OPTION_FIELDS and value is not None:
            kwargs[name] = value

    if 'timezone_offset' in kwargs:
        kwargs['timezone_offset'] = float(kwargs['timezone_offset'])
    for flag in ('strict_mode', 'include_raw_data'):
        if flag in kwargs:
            kwargs[flag] = bool(kwargs[flag])
    fmt = kwargs.get('timestamp_format', 'auto')
    if fmt not in TIMESTAMP_FORMATS:
        raise ValueError(f"timestamp_format must be one of {', '.join(TIMESTAMP_FORMATS)}")
    return ParserOptions(**kwargs)


def parse_single_attendance_record(
    line: str,
    line_number: Optional[int] = None,
    options: OptionsLike = None,
) -> ParseResult[AttendanceLog]:
    """
    Parse one tab-separated ATTLOG row.
    line_number is only used for log context.
    """
    where = f"line {line_number}" if line_number is not None else "record"
    try:
        opts  = resolve_options(options)
        parts = line.split('\t')
        if len(parts) < MIN_FIELDS:
            return ParseResult.fail(
                f"Insufficient fields ({len(parts)}/{MIN_FIELDS} minimum required)"
            )

        warnings: List[str] = []

        user_id = parts[0].strip()
        if not user_id:
            return ParseResult.fail("Missing User ID")

        timestamp_raw = parts[1].strip()
        if not timestamp_raw:
            return ParseResult.fail("Missing timestamp")
        timestamp = parse_timestamp(timestamp_raw, opts.timezone_offset)
        if timestamp is None:
            return ParseResult.fail(f"Invalid timestamp format: {timestamp_raw}")

        mode_raw    = parts[2].strip()
        in_out_mode = parse_in_out_mode(mode_raw)
        if in_out_mode is None:
            warnings.append(f"Unknown in/out mode: {mode_raw}, using CHECK_IN")
            in_out_mode = InOutMode.CHECK_IN

        verify_raw  = parts[3].strip()
        verify_type = parse_verify_type(verify_raw)
        if verify_type is None:
            warnings.append(f"Unknown verify type: {verify_raw}, using UNKNOWN")
            verify_type = VerifyType.UNKNOWN

        work_code = parse_work_code(parts[4].strip() if len(parts) > 4 else None)
        device_id = parse_int(parts[5].strip()) if len(parts) > 5 else None
        reserved  = [p.strip() for p in parts[6:] if p.strip()]

        record = AttendanceLog(
            user_id     = user_id,
            timestamp   = timestamp,
            in_out_mode = in_out_mode,
            verify_type = verify_type,
            work_code   = work_code,
            device_id   = device_id,
            reserved    = reserved or None,
            raw         = line if opts.include_raw_data else None,
        )
        return ParseResult.ok(record, warnings)

    except Exception as e:
        logger.debug(f"Parse error at {where}: {e}")
        return ParseResult.fail(f"Parse error: {e}")


def parse_attendance_log(
    data: str,
    options: OptionsLike = None,
) -> ParseResult[List[AttendanceLog]]:
    """
    Parse a full ATTLOG body (one row per line).

    Blank lines are skipped and do not count towards line numbers.
    Lenient mode (default) turns failed rows into "Line N: ..." warnings
    and keeps going; strict mode returns the first failure instead.
    A body with no usable rows is still a success with an empty list.
    """
    if not isinstance(data, str) or not data:
        return ParseResult.fail("Invalid or empty attendance data")
    try:
        opts = resolve_options(options)
    except (TypeError, ValueError) as e:
        return ParseResult.fail(f"Invalid parser options: {e}")

    lines = [ln.strip() for ln in data.strip().split('\n')]
    lines = [ln for ln in lines if ln]

    records:  List[AttendanceLog] = []
    warnings: List[str]           = []

    for line_number, line in enumerate(lines, start=1):
        try:
            result = parse_single_attendance_record(line, line_number, opts)
            if result.success and result.data is not None:
                records.append(result.data)
            for w in result.warnings or ():
                warnings.append(f"Line {line_number}: {w}")
            if not result.success:
                message = f"Line {line_number}: {result.error}"
                if opts.strict_mode:
                    logger.debug(f"Strict mode abort: {message}")
                    return ParseResult.fail(message)
                warnings.append(message)
        except Exception as e:
            message = f"Line {line_number}: Unexpected error - {e}"
            if opts.strict_mode:
                logger.debug(f"Strict mode abort: {message}")
                return ParseResult.fail(message)
            warnings.append(message)

    if warnings:
        logger.debug(f"ATTLOG warnings: {warnings}")
    logger.info(f"Parsed {len(records)} attendance records from {len(lines)} lines")
    return ParseResult.ok(records, warnings)
