"""
iclock/api.py
─────────────────────────────────────────────────────────────────────────────
iClock push receiver — thin HTTP adapter over iclock.parsers

TWO USAGE MODES:
  1. Mounted by your own service:
         from iclock.api import build_app
         app = build_app({"timezone_offset": 3})

  2. Standalone server:
         python -m iclock.api                     # default: 127.0.0.1:8088
         python -m iclock.api --port 9000
         uvicorn iclock.api:app --port 8088

ENDPOINTS:
  POST /iclock/cdata?SN=..&table=ATTLOG  — attendance upload, replies "OK"
  GET  /iclock/getrequest?SN=..&INFO=..  — device status poll, replies "OK"
  POST /parse/attlog                     — JSON: parse an ATTLOG body, return result
  POST /parse/device-info                — JSON: parse an INFO string, return result
  GET  /health                           — liveness

NOT HANDLED HERE:
  - Handshake options (GET /iclock/cdata) and command queues: devices get a
    plain "OK" and nothing to execute.
  - Persistence: records are logged only. Wrap build_app() or call the
    parsers directly to store them.
  - Authentication.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from iclock import __version__
from iclock.config import load_config, options_from_config
from iclock.parsers import parse_attendance_log, parse_device_info
from iclock.presentation import format_attendance_log
from iclock.serialization import result_to_dict

logger = logging.getLogger(__name__)

ACK = "OK"


class AttlogParseRequest(BaseModel):
    body:             str
    strict_mode:      bool = False
    include_raw_data: bool = False
    timestamp_format: str = "auto"
    timezone_offset:  Optional[float] = None   # falls back to config


class DeviceInfoParseRequest(BaseModel):
    sn:   str
    info: Optional[str] = None


def build_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Build the FastAPI application. config defaults to load_config();
    its parser keys become the options for device uploads.
    """
    cfg = config if config is not None else load_config()
    options = options_from_config(cfg)

    _app = FastAPI(
        title       = "iClock ATTLOG Receiver",
        description = "Parses ZKTeco iClock attendance uploads and device status polls",
        version     = __version__,
        docs_url    = "/docs",
        redoc_url   = None,
    )

    # ── DEVICE PUSH ──────────────────────────────────────────────────────

    @_app.post("/iclock/cdata", response_class=PlainTextResponse)
    async def cdata(request: Request):
        """
        Attendance upload. Always acknowledged so the terminal does not
        resend the batch; parse problems are logged instead.
        """
        sn    = request.query_params.get("SN", "")
        table = request.query_params.get("table", "")
        raw   = await request.body()

        if table.upper() != "ATTLOG":
            logger.info(f"Device {sn}: table {table or '-'} acknowledged without parsing")
            return PlainTextResponse(ACK)

        result = parse_attendance_log(raw.decode("utf-8", errors="replace"), options)
        if not result.success:
            logger.warning(f"Device {sn}: ATTLOG rejected: {result.error}")
            return PlainTextResponse(ACK)

        logger.info(f"Device {sn} - {len(result.data)} records")
        for log in result.data:
            logger.info(f"   {format_attendance_log(log)}")
        for warning in result.warnings or ():
            logger.warning(f"Device {sn}: {warning}")
        return PlainTextResponse(ACK)

    @_app.get("/iclock/getrequest", response_class=PlainTextResponse)
    def getrequest(request: Request):
        result = parse_device_info(dict(request.query_params))
        if not result.success:
            logger.warning(f"getrequest rejected: {result.error}")
            return PlainTextResponse(result.error, status_code=400)
        info = result.data
        logger.info(
            f"Device {info.serial_number} requesting commands "
            f"(model={info.model or '-'} ip={info.device_ip or '-'} records={info.record_count})"
        )
        return PlainTextResponse(ACK)

    # ── JSON PARSE ENDPOINTS ─────────────────────────────────────────────

    @_app.post("/parse/attlog", summary="Parse an ATTLOG body")
    def parse_attlog(req: AttlogParseRequest):
        tz = req.timezone_offset if req.timezone_offset is not None else options.timezone_offset
        result = parse_attendance_log(req.body, {
            "strict_mode":      req.strict_mode,
            "include_raw_data": req.include_raw_data,
            "timestamp_format": req.timestamp_format,
            "timezone_offset":  tz,
        })
        return JSONResponse(
            content     = result_to_dict(result),
            status_code = 200 if result.success else 422,
        )

    @_app.post("/parse/device-info", summary="Parse a device INFO string")
    def parse_info(req: DeviceInfoParseRequest):
        result = parse_device_info({"SN": req.sn, "INFO": req.info or ""})
        return JSONResponse(
            content     = result_to_dict(result),
            status_code = 200 if result.success else 422,
        )

    @_app.get("/health", summary="Health check")
    def health():
        return {
            "status":          "ok",
            "version":         __version__,
            "timezone_offset": options.timezone_offset,
            "strict_mode":     options.strict_mode,
        }

    return _app


# Module-level app instance — used by uvicorn iclock.api:app
app = build_app()


def serve(host: str, port: int, config: Optional[Dict[str, Any]] = None) -> None:
    """Run the receiver with uvicorn (blocking)."""
    import uvicorn

    uvicorn.run(
        build_app(config),
        host      = host,
        port      = port,
        log_level = "info",
    )


# ═══════════════════════════════════════════════════════════════════════════
# CLI ENTRYPOINT — python -m iclock.api
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import argparse

    cfg = load_config()
    parser = argparse.ArgumentParser(
        prog        = "iclock.api",
        description = "iClock ATTLOG receiver",
    )
    parser.add_argument("--port", type=int, default=cfg["port"],
                        help=f"Port to bind (default: {cfg['port']})")
    parser.add_argument("--host", type=str, default=cfg["host"],
                        help=f"Host to bind (default: {cfg['host']}); devices on the LAN need 0.0.0.0")
    args = parser.parse_args()

    logging.basicConfig(
        level  = logging.INFO,
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    serve(args.host, args.port, cfg)
