from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        rows = service.list_attendance(
            work_date=request.args.get("date"),
            operator_id=request.args.get("operator_id"),
        )
        return jsonify(list(rows))

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    def attendance_clock_in():
        data = request.get_json(silent=True) or {}
        record = service.clock_in(data.get("operator_id"), data.get("shift_id"))
        return jsonify({"message": "Clocked in successfully", "record": record})

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    def attendance_clock_out():
        data = request.get_json(silent=True) or {}
        record = service.clock_out(data.get("operator_id"))
        return jsonify({"message": "Clocked out successfully", "totalHours": record.total_hours, "record": record})

    @app.route("/api/operators/<int:operator_id>/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today(operator_id: int):
        container.operator_service.get_operator(operator_id)
        return jsonify({"operator_id": operator_id, "record": service.get_today(operator_id)})
