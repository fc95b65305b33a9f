from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_MANAGER_ID, DEFAULT_REVIEWER
from ..container import Container
from .model import leave_to_dict


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    def _optional_date(value):
        return parse_iso_date(value) if value else None

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    def list_leave_requests():
        requests_ = svc.list_requests(status=request.args.get("status"))
        return jsonify([leave_to_dict(r) for r in requests_])

    @app.route("/api/leave-requests/stats", methods=["GET"], endpoint="leave_request_stats")
    def leave_request_stats():
        return jsonify(svc.stats())

    @app.route("/api/leave-requests", methods=["POST"], endpoint="submit_leave_request")
    def submit_leave_request():
        data = json_body()
        created = svc.submit(
            employee_name=data.get("employeeName", ""),
            leave_type=data.get("leaveType", ""),
            start_date=_optional_date(data.get("startDate")),
            end_date=_optional_date(data.get("endDate")),
            reason=data.get("reason", ""),
            urgency=data.get("urgency") or "normal",
            manager_id=require_positive_int(data.get("managerId") or DEFAULT_MANAGER_ID, "managerId"),
            tags=data.get("tags", ""),
        )
        return jsonify(leave_to_dict(created)), 201

    @app.route("/api/leave-requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave_request")
    def approve_leave_request(request_id: int):
        reviewer = json_body().get("reviewedBy") or DEFAULT_REVIEWER
        return jsonify(leave_to_dict(svc.approve(request_id, reviewer=reviewer)))

    @app.route("/api/leave-requests/<int:request_id>/deny", methods=["POST"], endpoint="deny_leave_request")
    def deny_leave_request(request_id: int):
        reviewer = json_body().get("reviewedBy") or DEFAULT_REVIEWER
        return jsonify(leave_to_dict(svc.deny(request_id, reviewer=reviewer)))

    @app.route("/api/leave-requests/<int:request_id>", methods=["DELETE"], endpoint="delete_leave_request")
    def delete_leave_request(request_id: int):
        return jsonify({"success": svc.delete(request_id)})
