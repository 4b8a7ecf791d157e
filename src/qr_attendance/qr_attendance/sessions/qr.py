from __future__ import annotations

import io
from typing import Optional

import qrcode
from PIL import Image, UnidentifiedImageError


def render_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render a token as a PNG QR code.

    High error correction: the code is usually shown on a projector and
    scanned from the back of the room.
    """

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="#1a1a2e", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_image(image_bytes: bytes) -> Optional[str]:
    """Return the text of the first QR code found in an image, if any."""

    # pyzbar binds the native zbar library on import.
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(io.BytesIO(image_bytes)).convert("RGB")
    except (UnidentifiedImageError, OSError):
        return None

    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()
