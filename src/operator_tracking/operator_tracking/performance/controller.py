from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.performance_service

    @app.route("/api/stations/<int:station_id>/performance", methods=["GET"], endpoint="performance_list")
    def performance_list(station_id: int):
        container.line_service.get_station(station_id)
        rows = service.list_performance(
            station_id=station_id,
            start=request.args.get("start"),
            end=request.args.get("end"),
        )
        return jsonify(list(rows))

    @app.route("/api/stations/<int:station_id>/performance", methods=["POST"], endpoint="performance_create")
    def performance_create(station_id: int):
        data = request.get_json(silent=True) or {}
        record = service.record_performance(station_id, data)
        return jsonify(record), 201
