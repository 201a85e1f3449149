from datetime import timedelta

import pytest

from membership_system.core.enums import PackageStatus
from membership_system.core.exceptions import StorageError
from membership_system.lifecycle.synchronizer import LifecycleSynchronizer


@pytest.fixture
def synchronizer(client_packages, organizations):
    return LifecycleSynchronizer(client_packages, organizations)


def _stale_rows(clients, client_packages, today):
    a = clients.add("org-1", "Ananya Rao")
    b = clients.add("org-1", "Daniel Park")
    c = clients.add("org-1", "Meera Shah")
    rows = [
        # stored active, ends in 2 days
        client_packages.add(a.client_id, today - timedelta(days=28), today + timedelta(days=2), PackageStatus.ACTIVE),
        # stored expiring, ended yesterday
        client_packages.add(b.client_id, today - timedelta(days=31), today - timedelta(days=1), PackageStatus.EXPIRING_SOON),
        # stored upcoming, started today
        client_packages.add(c.client_id, today, today + timedelta(days=30), PackageStatus.UPCOMING),
    ]
    return rows


def test_synchronize_writes_only_stale_rows(synchronizer, clients, client_packages, fixed_now):
    today = fixed_now.date()
    rows = _stale_rows(clients, client_packages, today)
    fresh = client_packages.add(rows[0].client_id, today, today + timedelta(days=20), PackageStatus.ACTIVE)

    assert synchronizer.synchronize("org-1", now=fixed_now) == 3

    assert client_packages.rows[rows[0].client_package_id].status == PackageStatus.EXPIRING_SOON
    assert client_packages.rows[rows[1].client_package_id].status == PackageStatus.EXPIRED
    assert client_packages.rows[rows[2].client_package_id].status == PackageStatus.ACTIVE
    assert client_packages.rows[fresh.client_package_id].status == PackageStatus.ACTIVE


def test_second_run_without_time_change_updates_nothing(synchronizer, clients, client_packages, fixed_now):
    _stale_rows(clients, client_packages, fixed_now.date())

    assert synchronizer.synchronize("org-1", now=fixed_now) == 3
    assert synchronizer.synchronize("org-1", now=fixed_now) == 0
    assert client_packages.writes == 3


def test_empty_organization_returns_zero(synchronizer, fixed_now):
    assert synchronizer.synchronize("org-1", now=fixed_now) == 0


def test_failure_mid_batch_keeps_written_rows_and_resumes(synchronizer, clients, client_packages, fixed_now):
    rows = _stale_rows(clients, client_packages, fixed_now.date())
    client_packages.fail_after_writes = 1

    with pytest.raises(StorageError):
        synchronizer.synchronize("org-1", now=fixed_now)

    ended_yesterday = rows[1]
    assert client_packages.writes == 1
    assert client_packages.rows[ended_yesterday.client_package_id].status == PackageStatus.EXPIRED
    assert client_packages.rows[rows[0].client_package_id].status == PackageStatus.ACTIVE
    assert client_packages.rows[rows[2].client_package_id].status == PackageStatus.UPCOMING

    client_packages.fail_after_writes = None
    assert synchronizer.synchronize("org-1", now=fixed_now) == 2
    assert synchronizer.synchronize("org-1", now=fixed_now) == 0


def test_uses_organization_timezone_for_today(clients, client_packages, organizations, fixed_now):
    # 2025-03-15 10:00 UTC is still 2025-03-14 in Pago Pago (UTC-11).
    organizations.add("org-as", timezone_name="Pacific/Pago_Pago")
    member = clients.add("org-as", "Sina Tuilagi")
    local_today = fixed_now.date() - timedelta(days=1)
    row = client_packages.add(member.client_id, local_today - timedelta(days=1), local_today, PackageStatus.ACTIVE)

    LifecycleSynchronizer(client_packages, organizations).synchronize("org-as", now=fixed_now)

    assert client_packages.rows[row.client_package_id].status == PackageStatus.EXPIRING_SOON


def test_synchronize_all_covers_every_organization(clients, client_packages, organizations, fixed_now):
    organizations.add("org-2")
    today = fixed_now.date()
    for org_id in ("org-1", "org-2"):
        member = clients.add(org_id, f"Member of {org_id}")
        client_packages.add(member.client_id, today - timedelta(days=40), today - timedelta(days=10), PackageStatus.ACTIVE)

    result = LifecycleSynchronizer(client_packages, organizations).synchronize_all(now=fixed_now)

    assert result == {"org-1": 1, "org-2": 1}
