from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import int_arg, json_body, ok
from ..container import Container
from ..core.enums import CheckInMethod
from ..core.exceptions import ValidationError
from .qr import render_client_qr


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organizations/<org_id>/check-ins", methods=["POST"], endpoint="api_check_in")
    def check_in(org_id: str):
        data = json_body()
        result = container.check_in_service.check_in(
            org_id,
            str(data.get("token") or ""),
            data.get("method") or CheckInMethod.MANUAL.value,
        )
        return ok(result, 201)

    @app.route("/api/organizations/<org_id>/check-ins/qr", methods=["POST"], endpoint="api_check_in_qr")
    def check_in_qr(org_id: str):
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            raise ValidationError("Upload a QR image in the 'image' field")
        result = container.check_in_service.check_in_from_qr_image(org_id, upload.stream)
        return ok(result, 201)

    @app.route("/api/organizations/<org_id>/check-ins/recent", methods=["GET"], endpoint="api_recent_check_ins")
    def recent_check_ins(org_id: str):
        return ok(container.check_in_service.recent_check_ins(org_id, int_arg("limit")))

    @app.route("/api/clients/<client_id>/qr.png", methods=["GET"], endpoint="api_client_qr")
    def client_qr(client_id: str):
        client = container.client_service.get_client(client_id)
        png = render_client_qr(client.client_id)
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"client-{client.client_id}.png")
