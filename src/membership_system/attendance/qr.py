from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError


def render_client_qr(client_id: str, *, box_size: int = 10, border: int = 4) -> bytes:
    """PNG bytes of a QR code carrying the client id."""
    qr = qrcode.QRCode(version=1, box_size=box_size, border=border)
    qr.add_data(client_id)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def decode_qr_image(stream: BinaryIO) -> Optional[str]:
    """Text of the first QR code found in an uploaded image, or None.

    Raises:
        ValidationError: the upload is not a readable image or the QR payload is not UTF-8.
    """
    try:
        img = Image.open(stream)
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("Upload a readable QR image") from e

    # pyzbar needs the native zbar library; import on use so the rest of the
    # package loads without it.
    from pyzbar.pyzbar import decode as pyzbar_decode

    for symbol in pyzbar_decode(img):
        try:
            text = symbol.data.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise ValidationError("Upload a readable QR image") from e
        if text:
            return text
    return None
