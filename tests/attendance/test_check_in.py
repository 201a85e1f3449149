import logging
from datetime import timedelta

import pytest

from membership_system.attendance.service import CheckInService
from membership_system.core.enums import CheckInMethod
from membership_system.core.exceptions import ClientNotFoundError, NotFoundError, StorageError, ValidationError


@pytest.fixture
def service(attendance, clients):
    return CheckInService(attendance, clients)


def test_phone_token_checks_in_and_repeats_are_separate_events(service, clients, attendance, fixed_now):
    clients.add("org-1", "Ananya Rao", phone="555-0100")
    clients.add("org-1", "Daniel Park", phone="555-0101")

    first = service.check_in("org-1", "555-0100", "manual", now=fixed_now)
    second = service.check_in("org-1", "555-0100", "manual", now=fixed_now + timedelta(minutes=5))

    assert first.client.full_name == "Ananya Rao"
    assert second.client.full_name == "Ananya Rao"
    assert first.timestamp == fixed_now
    assert first.method == CheckInMethod.MANUAL
    assert len(attendance.entries) == 2
    assert {e.client_id for e in attendance.entries} == {first.client.client_id}


def test_unknown_token_is_not_found_and_writes_nothing(service, clients, attendance, fixed_now):
    clients.add("org-1", "Ananya Rao", phone="555-0100")

    with pytest.raises(ClientNotFoundError) as excinfo:
        service.check_in("org-1", "nobody@example.com", now=fixed_now)

    assert isinstance(excinfo.value, NotFoundError)
    assert attendance.entries == []


def test_ambiguous_name_takes_first_client_in_directory_order(service, clients, attendance, fixed_now, caplog):
    older = clients.add("org-1", "Daniel Park")
    newer = clients.add("org-1", "Ananya Rao")
    # directory order is newest first, not alphabetical
    assert [c.client_id for c in clients.list_for_org("org-1")] == [newer.client_id, older.client_id]

    with caplog.at_level(logging.WARNING, logger="membership_system.attendance.service"):
        result = service.check_in("org-1", "an", now=fixed_now)

    assert result.client.client_id == newer.client_id
    assert "2 clients matched by name" in caplog.text


def test_directory_order_decides_even_when_alphabetical_disagrees(service, clients, fixed_now):
    clients.add("org-1", "Ananya Rao")
    newest = clients.add("org-1", "Zane Hanley")

    assert service.check_in("org-1", "AN", now=fixed_now).client.client_id == newest.client_id


def test_client_id_beats_name_match(service, clients, fixed_now):
    target = clients.add("org-1", "Ananya Rao", client_id="c-1")
    clients.add("org-1", "Client c-1 Fan")

    assert service.check_in("org-1", "c-1", now=fixed_now).client.client_id == target.client_id


def test_name_match_beats_phone_match(service, clients, fixed_now):
    by_phone = clients.add("org-1", "Ananya Rao", phone="1234")
    by_name = clients.add("org-1", "Locker 1234")

    result = service.check_in("org-1", "1234", now=fixed_now)

    assert result.client.client_id == by_name.client_id != by_phone.client_id


def test_email_match_is_case_insensitive(service, clients, fixed_now):
    member = clients.add("org-1", "Meera Shah", email="Meera.Shah@Example.com")

    assert service.check_in("org-1", "meera.shah@example.COM", now=fixed_now).client.client_id == member.client_id


def test_clients_of_other_organizations_are_invisible(service, clients, attendance, fixed_now):
    clients.add("org-2", "Ananya Rao", phone="555-0100")

    with pytest.raises(ClientNotFoundError):
        service.check_in("org-1", "555-0100", now=fixed_now)
    assert attendance.entries == []


@pytest.mark.parametrize("token", ["", "   ", None])
def test_blank_token_is_rejected(service, token):
    with pytest.raises(ValidationError):
        service.check_in("org-1", token)


def test_unknown_method_is_rejected(service, clients):
    clients.add("org-1", "Ananya Rao")

    with pytest.raises(ValidationError):
        service.check_in("org-1", "Ananya", "fingerprint")


def test_failed_append_fails_the_check_in(service, clients, attendance, fixed_now):
    clients.add("org-1", "Ananya Rao", phone="555-0100")
    attendance.failing.add("append")

    with pytest.raises(StorageError):
        service.check_in("org-1", "555-0100", now=fixed_now)
    assert attendance.entries == []


def test_directory_failure_is_storage_error_not_not_found(service, clients, fixed_now):
    clients.failing.add("list_for_org")

    with pytest.raises(StorageError):
        service.check_in("org-1", "555-0100", now=fixed_now)


def test_recent_check_ins_newest_first(service, clients, fixed_now):
    a = clients.add("org-1", "Ananya Rao", phone="555-0100")
    clients.add("org-1", "Daniel Park", phone="555-0101")
    service.check_in("org-1", "555-0100", now=fixed_now)
    service.check_in("org-1", "555-0101", "qr", now=fixed_now + timedelta(minutes=1))
    service.check_in("org-1", a.client_id, now=fixed_now + timedelta(minutes=2))

    recent = service.recent_check_ins("org-1", 2)

    assert [(r.full_name, r.method) for r in recent] == [("Ananya Rao", CheckInMethod.MANUAL), ("Daniel Park", CheckInMethod.QR)]
