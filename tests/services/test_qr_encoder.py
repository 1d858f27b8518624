"""QR Encoder — PNG data URL rendering and error mapping."""

import base64

import pytest
import qrcode

from app.core.errors import HandshakeEncodingError
from app.infrastructure.qr_encoder import PNG_DATA_URL_PREFIX, QREncoder

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_encodes_png_data_url():
    url = QREncoder().encode_data_url("whatsapp://connect/gym/1700000000000")
    assert url.startswith(PNG_DATA_URL_PREFIX)
    raw = base64.b64decode(url[len(PNG_DATA_URL_PREFIX):])
    assert raw.startswith(PNG_MAGIC)


def test_oversized_payload_is_encoding_error():
    with pytest.raises(HandshakeEncodingError) as exc_info:
        QREncoder().encode_data_url("x" * 10_000)
    assert exc_info.value.code == "ENCODING_ERROR"


@pytest.mark.parametrize("error", [RuntimeError("renderer crashed"), TypeError("bad"), KeyError("PNG")])
def test_any_rendering_failure_is_encoding_error(monkeypatch, error):
    def broken_make_image(self, *args, **kwargs):
        raise error

    monkeypatch.setattr(qrcode.QRCode, "make_image", broken_make_image)
    with pytest.raises(HandshakeEncodingError) as exc_info:
        QREncoder().encode_data_url("whatsapp://connect/gym/1700000000000")
    assert exc_info.value.code == "ENCODING_ERROR"
    assert exc_info.value.__cause__ is error
