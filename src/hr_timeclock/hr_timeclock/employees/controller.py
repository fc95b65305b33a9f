from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body
from ..container import Container
from ..core.exceptions import ValidationError
from .model import employee_to_dict

_FIELD_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phone": "phone",
    "role": "role",
    "department": "department",
    "status": "status",
    "photoUrl": "photo_url",
    "tags": "tags",
}

_CONTACT_FIELD_NAMES = {
    "name": "emergency_contact_name",
    "phone": "emergency_contact_phone",
    "relationship": "emergency_contact_relationship",
}


def _employee_values(data: dict) -> dict[str, Any]:
    """Translate a camelCase JSON body into service field names.

    Only keys present in the body are returned, so the same mapping serves
    full creates and partial updates.
    """
    values = {attr: data[key] for key, attr in _FIELD_NAMES.items() if key in data}
    if "hireDate" in data:
        values["hire_date"] = parse_iso_date(data["hireDate"]) if data["hireDate"] else None

    contact = data.get("emergencyContact")
    if contact is not None:
        if not isinstance(contact, dict):
            raise ValidationError("emergencyContact must be an object")
        values.update({attr: contact[key] for key, attr in _CONTACT_FIELD_NAMES.items() if key in contact})
    return values


def register(app: Flask, container: Container) -> None:
    svc = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        query = request.args.get("q") or request.args.get("search")
        status = request.args.get("status")
        if query:
            employees = svc.search(query, status=status)
        else:
            employees = svc.list_employees(status=status, department=request.args.get("department"))
        return jsonify([employee_to_dict(e) for e in employees])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return jsonify(employee_to_dict(svc.get(employee_id)))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        created = svc.create(_employee_values(json_body()))
        return jsonify(employee_to_dict(created)), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT", "PATCH"], endpoint="update_employee")
    def update_employee(employee_id: int):
        updated = svc.update(employee_id, _employee_values(json_body()))
        return jsonify(employee_to_dict(updated))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        return jsonify({"success": svc.delete(employee_id)})
