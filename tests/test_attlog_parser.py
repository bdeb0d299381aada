"""
tests/test_attlog_parser.py
ATTLOG row and batch parsing: field extraction, enum fallback,
lenient/strict line handling.
"""

from datetime import datetime, timezone

import pytest

from iclock.models.enums import InOutMode, VerifyType, WorkCode
from iclock.models.record import ParserOptions
from iclock.parsers import attlog_parser
from iclock.parsers.attlog_parser import (
    parse_attendance_log,
    parse_single_attendance_record,
    resolve_options,
)


# ── Sample payloads ──────────────────────────────────────────

FULL_ROW = "11\t2025-08-27 10:57:49\t0\t25\t0\t0\t0\t0\t0\t0"

BATCH = (
    "11\t2025-08-27 10:57:49\t0\t25\t0\t0\n"
    "11\t2025-08-27 10:58:58\t1\t1\t0\t0\n"
    "42\t2025-08-27 12:01:00\t2\t15\n"
)

BATCH_WITH_BAD_LINE = (
    "11\t2025-08-27 10:57:49\t0\t25\n"
    "invalid\tdata\n"
    "12\t2025-08-27 11:00:00\t1\t1\n"
)


# ── SINGLE RECORD ────────────────────────────────────────────

class TestSingleRecord:

    def test_full_row(self):
        r = parse_single_attendance_record(FULL_ROW)
        assert r.success
        assert r.warnings is None
        log = r.data
        assert log.user_id     == "11"
        assert log.in_out_mode == InOutMode.CHECK_IN
        assert log.verify_type == VerifyType.PALM
        assert log.work_code   == WorkCode.NORMAL
        assert log.device_id   == 0
        assert log.reserved    == ["0", "0", "0", "0"]
        assert log.raw is None

    def test_timestamp_normalized_to_utc(self):
        r = parse_single_attendance_record(FULL_ROW)
        assert r.data.timestamp == datetime(2025, 8, 27, 6, 57, 49, tzinfo=timezone.utc)

    def test_timezone_offset_option(self):
        r = parse_single_attendance_record(FULL_ROW, options=ParserOptions(timezone_offset=0))
        assert r.data.timestamp == datetime(2025, 8, 27, 10, 57, 49, tzinfo=timezone.utc)

    @pytest.mark.parametrize("mode,verify", [
        (InOutMode.CHECK_OUT, VerifyType.FINGERPRINT),
        (InOutMode.BREAK_IN, VerifyType.CARD),
        (InOutMode.OVERTIME_OUT, VerifyType.FACE),
        (InOutMode.BREAK_OUT, VerifyType.PASSWORD),
    ])
    def test_first_four_columns_reflected(self, mode, verify):
        line = f"007\t2025-01-02 03:04:05\t{int(mode)}\t{int(verify)}"
        r = parse_single_attendance_record(line)
        assert r.success
        assert r.data.user_id     == "007"
        assert r.data.in_out_mode == mode
        assert r.data.verify_type == verify

    def test_minimal_row_defaults(self):
        r = parse_single_attendance_record("5\t2025-08-27 10:57:49\t1\t3")
        assert r.success
        assert r.data.work_code == WorkCode.NORMAL
        assert r.data.device_id is None
        assert r.data.reserved is None

    def test_insufficient_fields(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t0")
        assert not r.success
        assert r.data is None
        assert r.error == "Insufficient fields (3/4 minimum required)"

    def test_missing_user_id(self):
        r = parse_single_attendance_record("  \t2025-08-27 10:57:49\t0\t1")
        assert not r.success
        assert r.error == "Missing User ID"

    def test_missing_timestamp(self):
        r = parse_single_attendance_record("11\t \t0\t1")
        assert not r.success
        assert r.error == "Missing timestamp"

    def test_invalid_timestamp_is_fatal(self):
        r = parse_single_attendance_record("11\tyesterday\t0\t1")
        assert not r.success
        assert r.error == "Invalid timestamp format: yesterday"

    def test_unknown_mode_defaults_with_warning(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t9\t25")
        assert r.success
        assert r.data.in_out_mode == InOutMode.CHECK_IN
        assert r.warnings == ["Unknown in/out mode: 9, using CHECK_IN"]

    def test_unknown_verify_type_defaults_with_warning(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t1\tabc")
        assert r.success
        assert r.data.verify_type == VerifyType.UNKNOWN
        assert r.warnings == ["Unknown verify type: abc, using UNKNOWN"]

    def test_empty_mode_and_verify_both_warn(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t\t")
        assert r.success
        assert len(r.warnings) == 2

    def test_unknown_work_code_is_silent(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t0\t1\t99")
        assert r.success
        assert r.data.work_code == WorkCode.NORMAL
        assert r.warnings is None

    def test_known_work_code_and_device_id(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t4\t1\t2\t7")
        assert r.data.work_code == WorkCode.HOLIDAY
        assert r.data.device_id == 7
        assert r.data.in_out_mode == InOutMode.OVERTIME_IN

    def test_unparsable_device_id_is_none(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t0\t1\t0\tx")
        assert r.success
        assert r.data.device_id is None

    def test_reserved_drops_empty_fields(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t0\t1\t0\t1\t\tA \t\t B")
        assert r.data.reserved == ["A", "B"]

    def test_overlong_mode_warns_and_defaults(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t" + "1" * 5000 + "\t25")
        assert r.success
        assert r.data.in_out_mode == InOutMode.CHECK_IN
        assert len(r.warnings) == 1
        assert r.warnings[0].startswith("Unknown in/out mode:")

    def test_overlong_device_id_is_none(self):
        r = parse_single_attendance_record("11\t2025-08-27 10:57:49\t0\t25\t0\t" + "7" * 5000)
        assert r.success
        assert r.data.device_id is None

    def test_include_raw_data(self):
        r = parse_single_attendance_record(FULL_ROW, options={"includeRawData": True})
        assert r.data.raw == FULL_ROW

    def test_internal_fault_becomes_failure(self):
        r = parse_single_attendance_record(None)
        assert not r.success
        assert r.error.startswith("Parse error:")

    def test_record_is_immutable(self):
        r = parse_single_attendance_record(FULL_ROW)
        with pytest.raises(Exception):
            r.data.user_id = "12"


# ── BATCH ────────────────────────────────────────────────────

class TestBatch:

    def test_parses_all_lines(self):
        r = parse_attendance_log(BATCH)
        assert r.success
        assert [log.user_id for log in r.data] == ["11", "11", "42"]
        assert r.warnings is None

    def test_crlf_line_endings(self):
        r = parse_attendance_log(BATCH.replace("\n", "\r\n"))
        assert r.success
        assert len(r.data) == 3

    @pytest.mark.parametrize("data", ["", None, 42, b"11\t2025-08-27 10:57:49\t0\t1"])
    def test_unusable_input_fails(self, data):
        r = parse_attendance_log(data)
        assert not r.success
        assert r.error == "Invalid or empty attendance data"

    def test_blank_lines_only(self):
        r = parse_attendance_log("\n   \n\t\n")
        assert r.success
        assert r.data == []
        assert r.warnings is None

    def test_lenient_skips_bad_line(self):
        r = parse_attendance_log(BATCH_WITH_BAD_LINE)
        assert r.success
        assert [log.user_id for log in r.data] == ["11", "12"]
        assert r.warnings == ["Line 2: Insufficient fields (2/4 minimum required)"]

    def test_strict_aborts_on_bad_line(self):
        r = parse_attendance_log(BATCH_WITH_BAD_LINE, ParserOptions(strict_mode=True))
        assert not r.success
        assert r.data is None
        assert r.error == "Line 2: Insufficient fields (2/4 minimum required)"

    def test_only_invalid_line_lenient(self):
        r = parse_attendance_log("invalid\tdata")
        assert r.success
        assert r.data == []
        assert len(r.warnings) == 1
        assert "Insufficient fields" in r.warnings[0]

    def test_record_warnings_prefixed_with_line(self):
        r = parse_attendance_log("1\t2025-08-27 10:57:49\t0\t1\n2\t2025-08-27 10:57:49\t8\t1")
        assert r.success
        assert r.warnings == ["Line 2: Unknown in/out mode: 8, using CHECK_IN"]

    def test_strict_mode_keeps_enum_warnings_non_fatal(self):
        r = parse_attendance_log("2\t2025-08-27 10:57:49\t8\t1", {"strictMode": True})
        assert r.success
        assert len(r.data) == 1
        assert r.warnings == ["Line 1: Unknown in/out mode: 8, using CHECK_IN"]

    def test_blank_lines_do_not_count(self):
        r = parse_attendance_log("\n1\t2025-08-27 10:57:49\t0\t1\n\n\nbad\n")
        assert r.warnings == ["Line 2: Insufficient fields (1/4 minimum required)"]

    def test_unexpected_fault_lenient(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")
        monkeypatch.setattr(attlog_parser, "parse_single_attendance_record", boom)
        r = parse_attendance_log("1\t2025-08-27 10:57:49\t0\t1\n2\t2025-08-27 10:57:49\t0\t1")
        assert r.success
        assert r.data == []
        assert r.warnings == [
            "Line 1: Unexpected error - boom",
            "Line 2: Unexpected error - boom",
        ]

    def test_unexpected_fault_strict(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")
        monkeypatch.setattr(attlog_parser, "parse_single_attendance_record", boom)
        r = parse_attendance_log("1\t2025-08-27 10:57:49\t0\t1", {"strict_mode": True})
        assert not r.success
        assert r.error == "Line 1: Unexpected error - boom"

    def test_raw_data_is_trimmed_line(self):
        r = parse_attendance_log("  1\t2025-08-27 10:57:49\t0\t1  \n", {"include_raw_data": True})
        assert r.data[0].raw == "1\t2025-08-27 10:57:49\t0\t1"

    def test_bad_options_fail(self):
        r = parse_attendance_log(BATCH, {"timestamp_format": "weird"})
        assert not r.success
        assert r.error.startswith("Invalid parser options:")


# ── OPTIONS ──────────────────────────────────────────────────

class TestResolveOptions:

    def test_defaults(self):
        assert resolve_options() == ParserOptions()
        assert resolve_options().timezone_offset == 4

    def test_camel_case_keys(self):
        opts = resolve_options({
            "strictMode": True, "includeRawData": True,
            "timestampFormat": "iso", "timezoneOffset": "-5",
        })
        assert opts == ParserOptions(True, True, "iso", -5.0)

    def test_unknown_keys_ignored(self):
        assert resolve_options({"colour": "blue"}) == ParserOptions()

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            resolve_options(["strict"])
