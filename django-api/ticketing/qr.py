"""QR rendering for ticket payloads."""

import base64
import io
import json

import qrcode
from django.conf import settings
from qrcode.constants import ERROR_CORRECT_H

from ticketing.domain import TicketPayload


def render_data_url(payload: TicketPayload) -> str:
    """Encode the payload as JSON in a PNG QR code and return a data URL."""
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_H,
        box_size=getattr(settings, "TICKETING_QR_BOX_SIZE", 10),
        border=getattr(settings, "TICKETING_QR_BORDER", 2),
    )
    qr.add_data(json.dumps(payload.as_dict()))
    qr.make(fit=True)

    image = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    image.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
