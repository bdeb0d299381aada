"""
iclock/parsers/timestamp.py
Device wall-clock timestamps -> absolute UTC instants.

Terminals stamp ATTLOG rows with their own local clock ("2025-09-04 16:14:09")
and never send an offset. The configured device offset (hours east of UTC)
says what that clock means. The naive value is first placed on the
runtime's local clock, then shifted by (runtime offset - device offset);
the runtime offset cancels, so the instant is the same whatever TZ the
process runs under.

Known edge: a wall time that falls in a DST gap or fold of the *runtime*
zone gets a local offset that does not match its neighbours, and the
cancellation can be off by the DST delta. Run servers in UTC to avoid it.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TZ_OFFSET = 4

_LOCAL_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
)
_WHITESPACE = re.compile(r'\s+')


def parse_timestamp(text: Optional[str],
                    timezone_offset: float = DEFAULT_TZ_OFFSET) -> Optional[datetime]:
    """
    Parse a device timestamp. Returns a tz-aware UTC datetime, or None when
    the string cannot be read. Never raises.
    """
    if not text or not isinstance(text, str):
        return None
    try:
        clean = _WHITESPACE.sub(' ', text.strip().replace('/', '-'))
        parsed = _parse_local(clean)
        if parsed is None:
            # ISO-style retry: date and time joined by 'T'
            parsed = datetime.fromisoformat(clean.replace(' ', 'T', 1))
    except (ValueError, TypeError) as e:
        logger.debug(f"Unreadable timestamp {text!r}: {e}")
        return None

    try:
        if parsed.tzinfo is not None:
            # Explicit offset in the string wins over the device setting
            return parsed.astimezone(timezone.utc)
        return _device_to_utc(parsed, timezone_offset)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.debug(f"Timestamp {text!r} out of range: {e}")
        return None


def _parse_local(clean: str) -> Optional[datetime]:
    for fmt in _LOCAL_FORMATS:
        try:
            return datetime.strptime(clean, fmt)
        except ValueError:
            continue
    return None


def _device_to_utc(naive: datetime, timezone_offset: float) -> datetime:
    local = naive.astimezone()                  # runtime local clock
    server_offset = local.utcoffset()
    device_offset = timedelta(hours=timezone_offset)
    shifted = local + (server_offset - device_offset)
    return shifted.astimezone(timezone.utc)
