from __future__ import annotations

from flask import Flask, request

from ..common.http import as_date, json_body, ok
from ..container import Container

_EDITABLE = ("full_name", "email", "phone", "address", "age", "status", "org_id")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organizations/<org_id>/clients", methods=["GET"], endpoint="api_list_clients")
    def list_clients(org_id: str):
        term = request.args.get("q", "")
        status = request.args.get("status") or None
        return ok(container.client_service.search_clients(org_id, term, status=status))

    @app.route("/api/organizations/<org_id>/clients", methods=["POST"], endpoint="api_create_client")
    def create_client(org_id: str):
        data = json_body()
        client = container.client_service.create_client(
            org_id=org_id,
            full_name=str(data.get("full_name") or ""),
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            age=data.get("age"),
            join_date=as_date(data.get("join_date"), "join_date"),
            status=data.get("status") or "Active",
        )
        return ok(client, 201)

    @app.route("/api/clients/<client_id>", methods=["GET"], endpoint="api_get_client")
    def get_client(client_id: str):
        return ok(container.client_service.get_client(client_id))

    @app.route("/api/clients/<client_id>", methods=["PATCH"], endpoint="api_update_client")
    def update_client(client_id: str):
        data = json_body()
        changes = {k: data[k] for k in _EDITABLE if k in data}
        if "join_date" in data:
            changes["join_date"] = as_date(data["join_date"], "join_date")
        return ok(container.client_service.update_client(client_id, **changes))

    @app.route("/api/clients/<client_id>", methods=["DELETE"], endpoint="api_delete_client")
    def delete_client(client_id: str):
        container.client_service.delete_client(client_id)
        return ok({"client_id": client_id})
