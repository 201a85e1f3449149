from __future__ import annotations

from flask import Flask

from ..common.http import as_date, json_body, ok
from ..container import Container

_EDITABLE = ("name", "duration_days", "price", "description")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organizations/<org_id>/packages", methods=["GET"], endpoint="api_list_packages")
    def list_packages(org_id: str):
        return ok(container.package_service.list_packages(org_id))

    @app.route("/api/organizations/<org_id>/packages", methods=["POST"], endpoint="api_create_package")
    def create_package(org_id: str):
        data = json_body()
        package = container.package_service.create_package(
            org_id=org_id,
            name=str(data.get("name") or ""),
            duration_days=data.get("duration_days"),
            price=data.get("price"),
            description=data.get("description"),
        )
        return ok(package, 201)

    @app.route("/api/packages/<package_id>", methods=["PATCH"], endpoint="api_update_package")
    def update_package(package_id: str):
        data = json_body()
        changes = {k: data[k] for k in _EDITABLE if k in data}
        return ok(container.package_service.update_package(package_id, **changes))

    @app.route("/api/packages/<package_id>", methods=["DELETE"], endpoint="api_delete_package")
    def delete_package(package_id: str):
        container.package_service.delete_package(package_id)
        return ok({"package_id": package_id})

    @app.route("/api/clients/<client_id>/packages", methods=["GET"], endpoint="api_list_client_packages")
    def list_client_packages(client_id: str):
        return ok(container.package_service.list_client_packages(client_id))

    @app.route("/api/clients/<client_id>/packages", methods=["POST"], endpoint="api_assign_package")
    def assign_package(client_id: str):
        data = json_body()
        assignment = container.package_service.assign_package(
            client_id=client_id,
            package_id=str(data.get("package_id") or ""),
            start_date=as_date(data.get("start_date"), "start_date"),
            end_date=as_date(data.get("end_date"), "end_date"),
        )
        return ok(assignment, 201)
