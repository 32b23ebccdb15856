from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    @app.route("/api/shifts", methods=["GET"], endpoint="shifts_list")
    def shifts_list():
        return jsonify(list(service.list_shifts()))

    @app.route("/api/shifts/<int:shift_id>", methods=["GET"], endpoint="shifts_get")
    def shifts_get(shift_id: int):
        return jsonify(service.get_shift(shift_id))

    @app.route("/api/shifts", methods=["POST"], endpoint="shifts_create")
    def shifts_create():
        data = request.get_json(silent=True) or {}
        shift = service.create_shift(
            name=data.get("name"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            department_id=data.get("department_id"),
            capacity=data.get("capacity"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )
        return jsonify(shift), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="shifts_update")
    def shifts_update(shift_id: int):
        data = request.get_json(silent=True) or {}
        return jsonify(service.update_shift(shift_id, data))
