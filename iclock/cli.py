"""
iclock/cli.py
Command-line interface for the iClock parsers.

USAGE:
  iclock attlog ./attlog.txt
  iclock attlog ./attlog.txt --strict --tz 3
  cat attlog.txt | iclock attlog - --json
  iclock info --sn MED7241100320 --info "ZMM720-NF-Ver1.2.7,11,3,7094,192.168.1.14,10,12,12,10"
  iclock serve --host 0.0.0.0 --port 8088
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from iclock.config import load_config
from iclock.parsers import parse_attendance_log, parse_device_info
from iclock.presentation import format_attendance_log
from iclock.serialization import result_to_dict

logger = logging.getLogger(__name__)

# ANSI colors
GREEN  = '\033[92m'
YELLOW = '\033[93m'
RED    = '\033[91m'
CYAN   = '\033[96m'
RESET  = '\033[0m'
BOLD   = '\033[1m'


def main(argv: Optional[List[str]] = None):
    config = load_config()

    parser = argparse.ArgumentParser(
        prog        = 'iclock',
        description = 'Parse ZKTeco iClock ATTLOG uploads and device INFO strings',
    )
    parser.add_argument(
        '--verbose', '-v',
        action  = 'store_true',
        help    = 'Enable debug logging',
    )
    sub = parser.add_subparsers(dest='command', required=True)

    p_att = sub.add_parser('attlog', help='Parse a tab-separated ATTLOG body')
    p_att.add_argument(
        'source',
        help    = "File holding the request body, or '-' for stdin",
    )
    p_att.add_argument(
        '--strict',
        action  = 'store_true',
        default = bool(config['strict_mode']),
        help    = 'Fail on the first bad line instead of warning',
    )
    p_att.add_argument(
        '--raw',
        action  = 'store_true',
        default = bool(config['include_raw_data']),
        help    = 'Keep the original line on each record',
    )
    p_att.add_argument(
        '--tz',
        type    = float,
        default = config['timezone_offset'],
        help    = f"Device timezone offset in hours (default: {config['timezone_offset']})",
    )
    p_att.add_argument('--json', action='store_true', help='Print the result as JSON')

    p_info = sub.add_parser('info', help='Parse a device INFO string')
    p_info.add_argument('--sn', required=True, help='Device serial number')
    p_info.add_argument('--info', default='', help='Comma-separated INFO value')
    p_info.add_argument('--json', action='store_true', help='Print the result as JSON')

    p_serve = sub.add_parser('serve', help='Run the HTTP receiver')
    p_serve.add_argument('--host', default=config['host'])
    p_serve.add_argument('--port', type=int, default=config['port'])

    args = parser.parse_args(argv)

    # ── LOGGING SETUP ────────────────────────────────────────
    logging.basicConfig(
        level   = logging.DEBUG if args.verbose else logging.INFO,
        format  = '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt = '%H:%M:%S',
    )

    if args.command == 'attlog':
        _run_attlog(args)
    elif args.command == 'info':
        _run_info(args)
    elif args.command == 'serve':
        from iclock.api import serve
        serve(args.host, args.port, config)


def _run_attlog(args):
    body = _read_source(args.source)
    result = parse_attendance_log(body, {
        'strict_mode':      args.strict,
        'include_raw_data': args.raw,
        'timezone_offset':  args.tz,
    })

    if args.json:
        _print(json.dumps(result_to_dict(result), indent=2, ensure_ascii=False))
    elif result.success:
        for log in result.data:
            _print(f"  {format_attendance_log(log)}")
        for w in result.warnings or ():
            _print(f"  {YELLOW}⚠ {w}{RESET}")
        _print(f"\n{BOLD}{GREEN}✓ {len(result.data)} records{RESET}"
               f" ({len(result.warnings or ())} warnings)")
    else:
        _print(f"{RED}Error: {result.error}{RESET}")

    if not result.success:
        sys.exit(1)


def _run_info(args):
    result = parse_device_info({'SN': args.sn, 'INFO': args.info})

    if args.json:
        _print(json.dumps(result_to_dict(result), indent=2))
    elif result.success:
        d = result.data
        _print(f"{BOLD}Device {CYAN}{d.serial_number}{RESET}")
        _print(f"  Model       : {d.model or '-'}")
        _print(f"  IP          : {d.device_ip or '-'}")
        _print(f"  Users       : {d.user_count:,}  (admins {d.admin_count})")
        _print(f"  Records     : {d.record_count:,}")
        _print(f"  Fingerprints: {d.fp_count}  Faces: {d.face_count}"
               f"  Cards: {d.card_count}  Passwords: {d.password_count}")
        if d.firmware:
            _print(f"  Firmware    : {d.firmware} ({d.platform or '-'})")
        if d.push_ver:
            _print(f"  Push        : {d.push_ver}")
    else:
        _print(f"{RED}Error: {result.error}{RESET}")

    if not result.success:
        sys.exit(1)


def _read_source(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    path = Path(source)
    try:
        return path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        _print(f"{RED}Error: cannot read {path}: {e}{RESET}")
        sys.exit(1)


def _print(msg): print(msg)


if __name__ == '__main__':
    main()
