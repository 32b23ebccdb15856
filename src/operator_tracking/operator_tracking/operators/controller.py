from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.operator_service

    @app.route("/api/operators", methods=["GET"], endpoint="operators_list")
    def operators_list():
        return jsonify(list(service.list_operators()))

    @app.route("/api/operators/<int:operator_id>", methods=["GET"], endpoint="operators_get")
    def operators_get(operator_id: int):
        return jsonify(service.get_operator(operator_id))

    @app.route("/api/operators", methods=["POST"], endpoint="operators_create")
    def operators_create():
        data = request.get_json(silent=True) or {}
        operator = service.create_operator(
            name=data.get("name"),
            email=data.get("email"),
            employee_id=data.get("employee_id"),
            department_id=data.get("department_id"),
            skill_level=data.get("skill_level"),
        )
        return jsonify(operator), 201

    @app.route("/api/operators/<int:operator_id>", methods=["PUT"], endpoint="operators_update")
    def operators_update(operator_id: int):
        data = request.get_json(silent=True) or {}
        return jsonify(service.update_operator(operator_id, data))

    @app.route("/api/operators/<int:operator_id>", methods=["DELETE"], endpoint="operators_delete")
    def operators_delete(operator_id: int):
        return jsonify(service.delete_operator(operator_id))

    @app.route("/api/operators/<int:operator_id>/status", methods=["POST"], endpoint="operators_status")
    def operators_status(operator_id: int):
        data = request.get_json(silent=True) or {}
        return jsonify(service.set_status(operator_id, data.get("status")))
