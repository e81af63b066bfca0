from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.decorators import admin_required
from ..core.enums import AnnouncementKind, Role
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit", methods=["POST"], endpoint="api_audit")
    @admin_required
    def api_audit():
        data = request.get_json(silent=True) or {}
        try:
            audit_date = parse_iso_date(data["date"]) if data.get("date") else date.today()
        except ValueError:
            return jsonify({"success": False, "message": "Invalid date (YYYY-MM-DD)"}), 400

        try:
            found = container.auditor.audit_day(audit_date)
        except DomainError as e:
            logger.exception("Attendance audit failed for %s", audit_date)
            return jsonify({"success": False, "message": str(e)}), 503
        return jsonify({"success": True, "date": audit_date.isoformat(), "irregularities_found": found})

    @app.route("/api/reminders", methods=["POST"], endpoint="api_reminders")
    @admin_required
    def api_reminders():
        try:
            sent = container.broadcasts.send_daily_reminders()
        except DomainError as e:
            logger.exception("Sending class reminders failed")
            return jsonify({"success": False, "message": str(e)}), 503
        return jsonify({"success": True, "reminders_sent": sent})

    @app.route("/api/announcements", methods=["POST"], endpoint="api_announcements")
    @admin_required
    def api_announcements():
        data = request.get_json(silent=True) or {}
        try:
            kind = AnnouncementKind(data.get("type") or AnnouncementKind.GENERAL.value)
            target = data.get("target_role") or "all"
            target_role = None if target == "all" else Role(target)
        except ValueError:
            return jsonify({"success": False, "message": "Invalid announcement type or target role"}), 400

        try:
            sent = container.broadcasts.send_system_announcement(
                title=str(data.get("title") or ""),
                message=str(data.get("message") or ""),
                kind=kind,
                target_role=target_role,
                urgent=bool(data.get("urgent", False)),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except DomainError as e:
            logger.exception("Sending announcement failed")
            return jsonify({"success": False, "message": str(e)}), 503
        return jsonify({"success": True, "sent": sent})
