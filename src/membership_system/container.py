from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.factory import ClientMatcherFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import CheckInService
from .clients.mysql_client_repository import MySQLClientRepository
from .clients.service import ClientService
from .core import constants
from .core.enums import StatsErrorPolicy
from .database.connection import DBConfig, DatabaseConnection
from .lifecycle.resolver import StatusResolver
from .lifecycle.synchronizer import LifecycleSynchronizer
from .organizations.mysql_organization_repository import MySQLOrganizationRepository
from .organizations.service import OrganizationService
from .packages.mysql_catalog_repository import MySQLPackageCatalogRepository
from .packages.mysql_client_package_repository import MySQLClientPackageRepository
from .packages.service import PackageService
from .reports.service import StatsService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    organizations_repo: MySQLOrganizationRepository
    clients_repo: MySQLClientRepository
    catalog_repo: MySQLPackageCatalogRepository
    client_packages_repo: MySQLClientPackageRepository
    attendance_repo: MySQLAttendanceRepository

    organization_service: OrganizationService
    client_service: ClientService
    package_service: PackageService
    lifecycle_synchronizer: LifecycleSynchronizer
    stats_service: StatsService
    check_in_service: CheckInService


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    warning_days = int(getattr(settings, "EXPIRY_WARNING_DAYS", constants.DEFAULT_EXPIRY_WARNING_DAYS))
    default_timezone = str(getattr(settings, "DEFAULT_TIMEZONE", constants.DEFAULT_TIMEZONE))
    error_policy = StatsErrorPolicy(str(getattr(settings, "STATS_ERROR_POLICY", StatsErrorPolicy.ZERO.value)).lower())
    recent_clients = int(getattr(settings, "RECENT_CLIENTS_LIMIT", constants.DEFAULT_RECENT_CLIENTS_LIMIT))
    recent_checkins = int(getattr(settings, "RECENT_CHECKINS_LIMIT", constants.DEFAULT_RECENT_CHECKINS_LIMIT))

    organizations_repo = MySQLOrganizationRepository(conn)
    clients_repo = MySQLClientRepository(conn)
    catalog_repo = MySQLPackageCatalogRepository(conn)
    client_packages_repo = MySQLClientPackageRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    resolver = StatusResolver(warning_days=warning_days)

    organization_service = OrganizationService(organizations_repo, default_timezone=default_timezone)
    client_service = ClientService(clients_repo)
    package_service = PackageService(
        catalog_repo,
        client_packages_repo,
        clients_repo,
        resolver=resolver,
        organizations=organizations_repo,
        default_timezone=default_timezone,
    )
    lifecycle_synchronizer = LifecycleSynchronizer(
        client_packages_repo,
        organizations_repo,
        resolver=resolver,
        default_timezone=default_timezone,
    )
    stats_service = StatsService(
        clients_repo,
        client_packages_repo,
        catalog_repo,
        organizations_repo,
        error_policy=error_policy,
        default_timezone=default_timezone,
        recent_limit=recent_clients,
    )
    check_in_service = CheckInService(
        attendance_repo,
        clients_repo,
        matcher_factory=ClientMatcherFactory(),
        recent_limit=recent_checkins,
    )

    return Container(
        conn=conn,
        organizations_repo=organizations_repo,
        clients_repo=clients_repo,
        catalog_repo=catalog_repo,
        client_packages_repo=client_packages_repo,
        attendance_repo=attendance_repo,
        organization_service=organization_service,
        client_service=client_service,
        package_service=package_service,
        lifecycle_synchronizer=lifecycle_synchronizer,
        stats_service=stats_service,
        check_in_service=check_in_service,
    )
