from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_utc
from ..common.http import date_arg, int_arg, ok
from ..container import Container
from ..organizations.service import organization_timezone
from .model import DateRange
from .service import month_to_date


def register(app: Flask, container: Container) -> None:
    def requested_range(org_id: str) -> DateRange:
        # Default: month to date in the organization's timezone.
        tz_name = organization_timezone(
            container.organizations_repo, org_id, container.organization_service.default_timezone
        )
        default = month_to_date(now_utc(), tz_name)
        return DateRange(start=date_arg("start", default.start), end=date_arg("end", default.end))

    @app.route("/api/organizations/<org_id>/dashboard", methods=["GET"], endpoint="api_dashboard")
    def dashboard(org_id: str):
        return ok(container.stats_service.compute_dashboard_stats(org_id))

    @app.route("/api/organizations/<org_id>/reports/revenue", methods=["GET"], endpoint="api_revenue_report")
    def revenue_report(org_id: str):
        return ok(container.stats_service.compute_revenue_stats(org_id, requested_range(org_id)))

    @app.route("/api/organizations/<org_id>/reports/clients", methods=["GET"], endpoint="api_client_report")
    def client_report(org_id: str):
        return ok(container.stats_service.compute_client_report_stats(org_id, requested_range(org_id)))

    @app.route("/api/organizations/<org_id>/clients/recent", methods=["GET"], endpoint="api_recent_clients")
    def recent_clients(org_id: str):
        return ok(list(container.stats_service.recent_clients(org_id, int_arg("limit"))))

    @app.route("/api/organizations/<org_id>/packages/expiring", methods=["GET"], endpoint="api_expiring_packages")
    def expiring_packages(org_id: str):
        return ok(container.stats_service.list_expiring_packages(org_id))
