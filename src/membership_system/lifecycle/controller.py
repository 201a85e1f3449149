from __future__ import annotations

from flask import Flask

from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organizations/<org_id>/packages/sync", methods=["POST"], endpoint="api_sync_package_statuses")
    def sync_package_statuses(org_id: str):
        updated = container.lifecycle_synchronizer.synchronize(org_id)
        return ok({"updated": updated})
