from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..employees.model import employee_to_dict
from .model import department_to_dict

_FIELD_NAMES = {"name": "name", "description": "description", "managerId": "manager_id"}


def register(app: Flask, container: Container) -> None:
    svc = container.department_service

    def _values(data: dict) -> dict:
        return {attr: data[key] for key, attr in _FIELD_NAMES.items() if key in data}

    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    def list_departments():
        return jsonify([department_to_dict(o) for o in svc.list_departments()])

    @app.route("/api/departments/<int:department_id>", methods=["GET"], endpoint="get_department")
    def get_department(department_id: int):
        return jsonify(department_to_dict(svc.get(department_id)))

    @app.route("/api/departments/<int:department_id>/employees", methods=["GET"], endpoint="department_members")
    def department_members(department_id: int):
        return jsonify([employee_to_dict(e) for e in svc.members(department_id)])

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    def create_department():
        return jsonify(department_to_dict(svc.create(_values(json_body())))), 201

    @app.route("/api/departments/<int:department_id>", methods=["PUT", "PATCH"], endpoint="update_department")
    def update_department(department_id: int):
        return jsonify(department_to_dict(svc.update(department_id, _values(json_body()))))

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="delete_department")
    def delete_department(department_id: int):
        return jsonify({"success": svc.delete(department_id)})
