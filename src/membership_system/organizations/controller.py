from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organizations", methods=["POST"], endpoint="api_create_organization")
    def create_organization():
        data = json_body()
        org = container.organization_service.create_organization(
            owner_user_id=str(data.get("owner_user_id") or ""),
            name=str(data.get("name") or ""),
            timezone=data.get("timezone"),
            contact_email=data.get("contact_email"),
            contact_phone=data.get("contact_phone"),
            address=data.get("address"),
        )
        return ok(org, 201)

    @app.route("/api/organizations/<org_id>", methods=["GET"], endpoint="api_get_organization")
    def get_organization(org_id: str):
        return ok(container.organization_service.get(org_id))

    @app.route("/api/owners/<owner_user_id>/organization", methods=["GET"], endpoint="api_get_owner_organization")
    def get_owner_organization(owner_user_id: str):
        return ok(container.organization_service.get_for_owner(owner_user_id))
