from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from .model import stats_to_dict


def register(app: Flask, container: Container) -> None:
    svc = container.dashboard_service

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    def dashboard_stats():
        return jsonify(stats_to_dict(svc.stats()))
