"""QR Encoder — renders handshake payloads as PNG data URLs via the qrcode library.

Invariants:
    - Output is always "data:image/png;base64,<payload>" (embeddable in <img src>)
    - All qrcode/Pillow failures mapped to HandshakeEncodingError (core/errors.py)

Design Decisions:
    - Synchronous encoder; callers run it in a worker thread so the event loop
      keeps serving other requests while Pillow rasterizes
    - Error correction fixed at M: payloads are short URIs, scan reliability over density
"""

import base64
import io
import logging

import qrcode
from qrcode.exceptions import DataOverflowError

from app.core.errors import HandshakeEncodingError

logger = logging.getLogger(__name__)

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


class QREncoder:
    """Encodes text into a scannable PNG, returned as a data URL."""

    def __init__(self, box_size: int = 10, border: int = 4):
        self.box_size = box_size
        self.border = border

    def encode_data_url(self, data: str) -> str:
        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                box_size=self.box_size,
                border=self.border,
            )
            qr.add_data(data)
            qr.make(fit=True)
            image = qr.make_image(fill_color="black", back_color="white")
            buffer = io.BytesIO()
            image.save(buffer)
        except DataOverflowError as e:
            logger.error(f"QR payload too large: {e}")
            raise HandshakeEncodingError("payload exceeds QR capacity") from e
        except Exception as e:
            logger.error(f"QR rendering failed: {e}", exc_info=True)
            raise HandshakeEncodingError("image rendering failed") from e
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return PNG_DATA_URL_PREFIX + encoded
