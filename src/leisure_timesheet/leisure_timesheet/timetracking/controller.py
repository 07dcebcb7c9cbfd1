from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import today_local
from ..common.http import current_role, date_arg, json_errors, login_required, target_user_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.time_tracking_service

    def _parse_month(value: str) -> tuple[int, int]:
        try:
            parsed = datetime.strptime(value, "%Y-%m")
        except ValueError:
            raise ValidationError(f"Invalid month: {value}") from None
        return parsed.year, parsed.month

    @app.route("/api/time-entries", methods=["POST"], endpoint="time_entries_create")
    @login_required
    @json_errors
    def time_entries_create():
        data = request.get_json(silent=True) or {}
        user_id = target_user_id(data.get("user_id"))
        entry_id = svc.record_event(user_id, data.get("type"), center_id=session.get("center_id"))
        return jsonify({"success": True, "entry_id": entry_id}), 201

    @app.route("/api/time-entries/status", endpoint="time_entries_status")
    @login_required
    @json_errors
    def time_entries_status():
        user_id = target_user_id(request.args.get("user_id"))
        return jsonify(svc.current_status(user_id))

    @app.route("/api/time-tracking/daily", endpoint="time_tracking_daily")
    @login_required
    @json_errors
    def time_tracking_daily():
        user_id = target_user_id(request.args.get("user_id"))
        return jsonify(svc.daily_summary(user_id, date_arg("date", today_local(container.tz_name))))

    @app.route("/api/time-tracking/summary", endpoint="time_tracking_summary")
    @login_required
    @json_errors
    def time_tracking_summary():
        user_id = target_user_id(request.args.get("user_id"))
        return jsonify(svc.work_summary(user_id, date_arg("date", today_local(container.tz_name))))

    @app.route("/api/schedules/monthly", endpoint="schedules_monthly")
    @login_required
    @json_errors
    def schedules_monthly():
        user_id = target_user_id(request.args.get("user_id"))
        year, month = _parse_month(request.args.get("month") or today_local(container.tz_name).strftime("%Y-%m"))
        return jsonify(svc.monthly_schedule(user_id, year, month))

    @app.route("/api/schedules/<work_date>", methods=["PUT"], endpoint="schedules_set")
    @login_required
    @json_errors
    def schedules_set(work_date: str):
        data = request.get_json(silent=True) or {}
        try:
            day = datetime.strptime(work_date, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError(f"Invalid date: {work_date}") from None

        schedule_id = svc.set_planned_minutes(
            current_role=current_role(),
            current_user_id=str(session["user_id"]),
            subject_id=str(data.get("user_id") or session["user_id"]),
            work_date=day,
            hours=data.get("hours", 0),
            minutes=data.get("minutes", 0),
            center_id=session.get("center_id"),
        )
        return jsonify({"success": True, "schedule_id": schedule_id})

    @app.route("/api/presence", endpoint="presence")
    @login_required
    @json_errors
    def presence():
        if current_role() == Role.ANIMATOR:
            raise AuthorizationError("You do not have permission")

        user_ids = [u.strip() for u in (request.args.get("user_ids") or "").split(",") if u.strip()]
        return jsonify(svc.presence(user_ids, date_arg("date", today_local(container.tz_name))))
