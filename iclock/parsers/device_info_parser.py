"""
iclock/parsers/device_info_parser.py
Parses the device status a terminal reports on GET /iclock/getrequest.

    ?SN=MED7241100320&INFO=ZMM720-NF-Ver1.2.7,11,3,7094,192.168.1.14,10,12,12,10

INFO positions:
    0 model | 1 users | 2 fingerprints | 3 records | 4 device IP
    5 admins | 6 passwords | 7 cards | 8 faces
    9 firmware | 10 platform | 11 finger algo | 12 face algo | 13 push ver
Positions 9-13 are only sent by newer firmware.
"""

import logging
from collections.abc import Mapping
from typing import Optional, Sequence

from iclock.models.record import DeviceInfo, ParseResult
from iclock.parsers.coercers import parse_int

logger = logging.getLogger(__name__)

BASE_SEGMENTS = 9


def parse_device_info(query_params: Mapping[str, str]) -> ParseResult[DeviceInfo]:
    """
    Build a DeviceInfo from request query parameters. SN is required;
    a missing INFO value just leaves every field at its default.
    """
    if not isinstance(query_params, Mapping):
        return ParseResult.fail("Missing device serial number (SN parameter)")
    serial = query_params.get('SN')
    if not serial:
        return ParseResult.fail("Missing device serial number (SN parameter)")

    info = query_params.get('INFO')
    if not info:
        return ParseResult.ok(DeviceInfo(serial_number=serial))

    try:
        parts = info.split(',')
        extended = {}
        if len(parts) > BASE_SEGMENTS:
            extended = dict(
                firmware   = _text(parts, 9) or None,
                platform   = _text(parts, 10) or None,
                finger_ver = _text(parts, 11) or None,
                face_ver   = _text(parts, 12) or None,
                push_ver   = _text(parts, 13) or None,
            )
        device = DeviceInfo(
            serial_number  = serial,
            model          = _text(parts, 0),
            user_count     = _count(parts, 1),
            fp_count       = _count(parts, 2),
            record_count   = _count(parts, 3),
            device_ip      = _text(parts, 4),
            admin_count    = _count(parts, 5),
            password_count = _count(parts, 6),
            card_count     = _count(parts, 7),
            face_count     = _count(parts, 8),
            **extended,
        )
    except Exception as e:
        logger.debug(f"Device info parse failed for {serial}: {e}")
        return ParseResult.fail(f"Failed to parse device info: {e}")

    return ParseResult.ok(device)


def _text(parts: Sequence[str], index: int) -> str:
    return parts[index] if index < len(parts) else ''


def _count(parts: Sequence[str], index: int) -> int:
    num: Optional[int] = parse_int(_text(parts, index))
    return num if num is not None and num > 0 else 0
