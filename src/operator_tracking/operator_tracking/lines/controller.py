from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/production-lines", methods=["GET"], endpoint="lines_list")
    def lines_list():
        return jsonify(list(container.line_service.list_lines()))

    @app.route("/api/stations", methods=["GET"], endpoint="stations_list")
    def stations_list():
        stations = container.line_service.list_stations(line_id=request.args.get("line_id"))
        return jsonify(list(stations))

    @app.route("/api/stations/<int:station_id>/efficiency", methods=["PUT"], endpoint="stations_efficiency")
    def stations_efficiency(station_id: int):
        data = request.get_json(silent=True) or {}
        station = container.line_service.update_efficiency(station_id, data.get("efficiency_percentage"))
        return jsonify(station)
