from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.http import json_body
from ..common.validators import require_positive_int
from ..container import Container
from .model import entry_to_dict, weekly_to_dict


def register(app: Flask, container: Container) -> None:
    svc = container.time_tracking_service

    def _employee_id(source: dict) -> int:
        return require_positive_int(source.get("employeeId"), "employeeId")

    def _optional_employee_id():
        raw = request.args.get("employeeId")
        return require_positive_int(raw, "employeeId") if raw else None

    @app.route("/api/time-entries/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        entry = svc.clock_in(_employee_id(json_body()))
        return jsonify(entry_to_dict(entry)), 201

    @app.route("/api/time-entries/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        entry = svc.clock_out(_employee_id(json_body()))
        return jsonify(entry_to_dict(entry)), 200

    @app.route("/api/time-entries/current", methods=["GET"], endpoint="current_entry")
    def current_entry():
        entry = svc.get_current_entry(_employee_id(request.args))
        return jsonify(entry_to_dict(entry) if entry else None)

    @app.route("/api/time-entries/today", methods=["GET"], endpoint="todays_entries")
    def todays_entries():
        entries = svc.get_todays_entries(employee_id=_optional_employee_id())
        return jsonify([entry_to_dict(e) for e in entries])

    @app.route("/api/time-entries/weekly", methods=["GET"], endpoint="weekly_hours")
    def weekly_hours():
        employee_id = _employee_id(request.args)
        raw_start = request.args.get("weekStart")
        week_start = parse_iso_date(raw_start) if raw_start else svc.week_start_for(svc.today())
        return jsonify(weekly_to_dict(svc.get_weekly_hours(employee_id, week_start)))

    @app.route("/api/time-entries", methods=["GET"], endpoint="list_time_entries")
    def list_time_entries():
        entries = svc.list_entries(employee_id=_optional_employee_id())
        return jsonify([entry_to_dict(e) for e in entries])

    @app.route("/api/time-entries/<int:entry_id>", methods=["PATCH"], endpoint="update_time_entry")
    def update_time_entry(entry_id: int):
        data = json_body()
        clock_in_raw = data.get("clockIn")
        clock_out_raw = data.get("clockOut")
        entry = svc.update_entry(
            entry_id,
            clock_in=parse_iso_datetime(clock_in_raw) if clock_in_raw else None,
            clock_out=parse_iso_datetime(clock_out_raw) if clock_out_raw else None,
        )
        return jsonify(entry_to_dict(entry))

    @app.route("/api/time-entries/<int:entry_id>", methods=["DELETE"], endpoint="delete_time_entry")
    def delete_time_entry(entry_id: int):
        return jsonify({"success": svc.delete_entry(entry_id)})
