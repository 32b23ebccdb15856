from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    def dashboard_stats():
        return jsonify(service.snapshot())

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        status = service.health()
        body = {"status": status.status, "database": status.database}
        if status.timestamp is not None:
            body["timestamp"] = status.timestamp
        return jsonify(body), (200 if status.ok else 503)
