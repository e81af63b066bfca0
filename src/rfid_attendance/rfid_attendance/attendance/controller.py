from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_hhmm
from ..common.decorators import admin_required
from ..core.enums import AttendanceStatus, Direction
from ..core.exceptions import PersistenceFailure, ScanRejected, TooSoon
from ..container import Container
from .model import AttendanceResult

logger = logging.getLogger(__name__)

REJECTION_HTTP_STATUS = {
    "invalid_badge": 400,
    "unknown_badge": 404,
    "unknown_classroom": 404,
    "no_schedule": 409,
    "ambiguous_schedule": 409,
    "duplicate_scan": 409,
    "too_soon": 429,
}


def result_to_dict(result: AttendanceResult) -> dict:
    log = result.log
    return {
        "id": log.log_id,
        "teacher_id": log.teacher_id,
        "teacher_name": result.teacher.name,
        "classroom_id": log.classroom_id,
        "classroom_name": result.classroom.name,
        "schedule_id": log.schedule_id,
        "scan_time": format_hhmm(log.scan_time),
        "scan_type": log.scan_type.value,
        "status": log.status.value,
        "date": log.log_date.isoformat(),
        "created_at": log.created_at.isoformat(),
        "schedule": {
            "subject": result.schedule.subject,
            "start_time": format_hhmm(result.schedule.start_time),
            "end_time": format_hhmm(result.schedule.end_time),
            "grace_period_minutes": result.schedule.grace_period_minutes,
        },
        "note": result.note,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    @admin_required
    def api_scan():
        """Record one badge scan from a scanner terminal."""

        data = request.get_json(silent=True) or {}
        badge_id = str(data.get("badge_id") or "")
        try:
            classroom_id = int(data.get("classroom_id"))
        except (TypeError, ValueError):
            return jsonify({"success": False, "code": "unknown_classroom", "message": "Please select a classroom first"}), 400

        try:
            result = container.recorder.record_scan(badge_id, classroom_id)
        except ScanRejected as e:
            body = {"success": False, "code": e.code, "message": str(e)}
            if isinstance(e, TooSoon):
                body["retry_after_seconds"] = e.retry_after_seconds
            return jsonify(body), REJECTION_HTTP_STATUS.get(e.code, 422)
        except PersistenceFailure:
            logger.exception("Attendance write failed")
            return jsonify({"success": False, "code": PersistenceFailure.code, "message": "Could not save attendance, please scan again"}), 503
        except Exception:
            logger.exception("Unexpected error while recording scan")
            return jsonify({"success": False, "code": "system_error", "message": "System error while recording attendance"}), 500

        verb = "scanned in" if result.direction == Direction.IN else "scanned out"
        return (
            jsonify(
                {
                    "success": True,
                    "level": "success" if result.status == AttendanceStatus.ON_TIME else "warning",
                    "message": f"{result.teacher.name} {verb} successfully",
                    "data": result_to_dict(result),
                }
            ),
            201,
        )
