from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.http import current_role, json_errors, login_required
from ..core.exceptions import ValidationError
from ..container import Container
from .model import SchoolYear, VacationRange
from .school_years import current_school_year, find_vacation, generate_school_years


def register(app: Flask, container: Container) -> None:
    svc = container.period_service

    def _parse_date(value) -> date:
        try:
            return parse_iso_date(str(value or ""))
        except ValueError:
            raise ValidationError(f"Invalid date: {value}") from None

    def _vacation_from(data: dict) -> VacationRange:
        return VacationRange(
            label=str(data.get("name") or ""),
            start=_parse_date(data.get("start_date")),
            end=_parse_date(data.get("end_date")),
        )

    def _school_year_ui(year: SchoolYear) -> dict:
        return {
            "name": year.name,
            "start_date": year.start_date.strftime("%Y-%m-%d"),
            "end_date": year.end_date.strftime("%Y-%m-%d"),
            "vacations": [
                {"name": v.label, "start_date": v.start.strftime("%Y-%m-%d"), "end_date": v.end.strftime("%Y-%m-%d")}
                for v in year.vacations
            ],
        }

    def _school_years() -> list[SchoolYear]:
        return generate_school_years(today_local(container.tz_name).year, container.school_years_ahead)

    @app.route("/api/school-years", endpoint="school_years")
    @login_required
    @json_errors
    def school_years():
        years = _school_years()
        current = current_school_year(years, today_local(container.tz_name))
        return jsonify(
            {
                "current": current.name if current else None,
                "school_years": [_school_year_ui(y) for y in years],
            }
        )

    @app.route("/api/periods/split-preview", methods=["POST"], endpoint="periods_split_preview")
    @login_required
    @json_errors
    def periods_split_preview():
        data = request.get_json(silent=True) or {}
        subs = svc.preview_split(_vacation_from(data), bool(data.get("split_into_weeks")))
        return jsonify(
            [
                {"name": s.label, "start_date": s.start.strftime("%Y-%m-%d"), "end_date": s.end.strftime("%Y-%m-%d")}
                for s in subs
            ]
        )

    @app.route("/api/periods/vacation", methods=["POST"], endpoint="periods_create_vacation")
    @login_required
    @json_errors
    def periods_create_vacation():
        data = request.get_json(silent=True) or {}
        school_year_id = data.get("school_year_id")

        if data.get("vacation"):
            year = next((y for y in _school_years() if y.name == school_year_id), None)
            vacation = find_vacation(year, data["vacation"]) if year else None
            if not vacation:
                raise ValidationError("Unknown vacation for this school year")
        else:
            vacation = _vacation_from(data)

        ids = svc.create_from_vacation(
            current_role=current_role(),
            center_id=str(session.get("center_id") or ""),
            school_year_id=school_year_id,
            vacation=vacation,
            split_into_weeks=bool(data.get("split_into_weeks")),
            animator_ids=[str(a) for a in data.get("animator_ids") or []],
        )
        return jsonify({"success": True, "period_ids": ids}), 201

    @app.route("/api/periods", methods=["GET", "POST"], endpoint="periods")
    @login_required
    @json_errors
    def periods():
        if request.method == "POST":
            data = request.get_json(silent=True) or {}
            period_id = svc.create_period(
                current_role=current_role(),
                center_id=str(session.get("center_id") or ""),
                name=str(data.get("name") or ""),
                period_type=data.get("type"),
                start_date=_parse_date(data.get("start_date")),
                end_date=_parse_date(data.get("end_date")),
                school_year_id=data.get("school_year_id"),
                animator_ids=[str(a) for a in data.get("animator_ids") or []],
            )
            return jsonify({"success": True, "period_id": period_id}), 201

        return jsonify(
            svc.list_periods(
                center_id=str(session.get("center_id") or ""),
                school_year_id=request.args.get("school_year_id"),
            )
        )

    @app.route("/api/periods/<int:period_id>", methods=["DELETE"], endpoint="periods_delete")
    @login_required
    @json_errors
    def periods_delete(period_id: int):
        svc.delete_period(current_role=current_role(), period_id=period_id)
        return jsonify({"success": True})
