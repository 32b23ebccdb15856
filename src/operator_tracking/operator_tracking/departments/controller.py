from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    def departments_list():
        return jsonify(list(container.department_service.list_departments()))

    @app.route("/api/departments", methods=["POST"], endpoint="departments_create")
    def departments_create():
        data = request.get_json(silent=True) or {}
        department = container.department_service.create_department(
            name=data.get("name"),
            description=data.get("description"),
        )
        return jsonify(department), 201

    @app.route("/api/departments/<int:department_id>", methods=["GET"], endpoint="departments_get")
    def departments_get(department_id: int):
        return jsonify(container.department_service.get_department(department_id))
