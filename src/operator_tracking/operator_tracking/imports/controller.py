from __future__ import annotations

import io

from flask import Flask, Response, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from .service import template_header


def register(app: Flask, container: Container) -> None:
    @app.route("/api/import/operators", methods=["POST"], endpoint="import_operators")
    def import_operators():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded")

        # Upload size is capped by MAX_CONTENT_LENGTH.
        try:
            text = upload.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError("File must be UTF-8 encoded CSV") from None

        result = container.import_service.import_csv(io.StringIO(text, newline=""))

        app.logger.info("Imported operators from %s", upload.filename)
        return jsonify(
            {
                "message": result.message,
                "imported": result.imported,
                "created": result.created,
                "updated": result.updated,
                "errors": result.errors or None,
            }
        )

    @app.route("/api/import/operators/template", methods=["GET"], endpoint="import_operators_template")
    def import_operators_template():
        return Response(
            template_header() + "\n",
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=operators_template.csv"},
        )
