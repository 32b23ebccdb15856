from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/api/shift-assignments", methods=["GET"], endpoint="assignments_list")
    def assignments_list():
        rows = service.list_assignments(
            assigned_date=request.args.get("date"),
            shift_id=request.args.get("shift_id"),
        )
        return jsonify(list(rows))

    @app.route("/api/shift-assignments", methods=["POST"], endpoint="assignments_create")
    def assignments_create():
        data = request.get_json(silent=True) or {}
        assignment = service.assign(
            shift_id=data.get("shift_id"),
            operator_id=data.get("operator_id"),
            station_id=data.get("station_id"),
            assigned_date=data.get("assigned_date"),
        )
        return jsonify(assignment), 201

    @app.route("/api/shift-assignments/<int:assignment_id>", methods=["DELETE"], endpoint="assignments_delete")
    def assignments_delete(assignment_id: int):
        return jsonify(service.remove(assignment_id))
