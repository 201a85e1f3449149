import io

import pytest

from membership_system.attendance.qr import render_client_qr
from membership_system.attendance.service import CheckInService
from membership_system.core.enums import CheckInMethod
from membership_system.core.exceptions import ValidationError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_render_client_qr_returns_png():
    png = render_client_qr("8f1d7c3e-client")
    assert png.startswith(PNG_SIGNATURE)


def test_qr_image_checks_in_encoded_client(attendance, clients, fixed_now):
    pytest.importorskip("pyzbar.pyzbar")
    member = clients.add("org-1", "Ananya Rao", client_id="c-42")
    service = CheckInService(attendance, clients)

    result = service.check_in_from_qr_image("org-1", io.BytesIO(render_client_qr(member.client_id)), now=fixed_now)

    assert result.client.client_id == "c-42"
    assert result.method == CheckInMethod.QR
    assert attendance.entries[0].method == CheckInMethod.QR


def test_image_without_qr_code_is_rejected(attendance, clients):
    pytest.importorskip("pyzbar.pyzbar")
    from PIL import Image

    blank = io.BytesIO()
    Image.new("RGB", (64, 64), "white").save(blank, format="PNG")
    blank.seek(0)

    with pytest.raises(ValidationError):
        CheckInService(attendance, clients).check_in_from_qr_image("org-1", blank)
    assert attendance.entries == []


@pytest.mark.parametrize("payload", [b"not an image", render_client_qr("c-42")[:60]])
def test_unreadable_upload_is_rejected(attendance, clients, payload):
    clients.add("org-1", "Ananya Rao", client_id="c-42")

    with pytest.raises(ValidationError):
        CheckInService(attendance, clients).check_in_from_qr_image("org-1", io.BytesIO(payload))
    assert attendance.entries == []


def test_non_utf8_qr_payload_is_rejected(attendance, clients, monkeypatch):
    pyzbar = pytest.importorskip("pyzbar.pyzbar")

    class Symbol:
        data = b"\xff\xfe\xfa"

    monkeypatch.setattr(pyzbar, "decode", lambda img: [Symbol()])

    with pytest.raises(ValidationError):
        CheckInService(attendance, clients).check_in_from_qr_image("org-1", io.BytesIO(render_client_qr("c-42")))
    assert attendance.entries == []
