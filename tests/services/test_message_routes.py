"""Message & Webhook Routes — sendText receipts and webhook acks over HTTP."""

import qrcode

from app.core.errors import HandshakeEncodingError


async def test_send_text_returns_receipt(client):
    res = await client.post(
        "/message/sendText/gym",
        json={"number": "555", "textMessage": {"text": "hi"}},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert body["key"]["remoteJid"] == "555@s.whatsapp.net"
    assert body["key"]["id"].startswith("mock_message_id_")


async def test_send_text_ids_differ(client):
    payload = {"number": "555", "textMessage": {"text": "hi"}}
    first = (await client.post("/message/sendText/gym", json=payload)).json()
    second = (await client.post("/message/sendText/gym", json=payload)).json()
    assert first["key"]["id"] != second["key"]["id"]


async def test_send_text_does_not_require_instance(client, gateway):
    res = await client.post(
        "/message/sendText/nobody",
        json={"number": "555", "textMessage": {"text": "hi"}},
    )
    assert res.status_code == 200
    assert gateway.list_instances() == []


async def test_send_text_without_text_is_malformed(client):
    res = await client.post(
        "/message/sendText/gym", json={"number": "555", "textMessage": {}},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "MALFORMED_PAYLOAD"
    assert error["context"]["instance_id"] == "gym"


async def test_send_text_without_text_message_is_malformed(client):
    res = await client.post("/message/sendText/gym", json={"number": "555"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MALFORMED_PAYLOAD"


async def test_webhook_always_received(client):
    for kwargs in ({"json": {"event": "x"}}, {"json": [1]}, {"content": b"not json"}, {}):
        res = await client.post("/webhook/anything", **kwargs)
        assert res.status_code == 200
        assert res.json() == {"status": "received"}


async def test_webhook_reaches_subscriber(client, gateway):
    seen = []
    gateway.webhooks.subscribe("gym", lambda i, p: seen.append(p))
    await client.post("/webhook/gym", json={"event": "messages.upsert"})
    assert seen == [{"event": "messages.upsert"}]


async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert "T" in body["timestamp"]


async def test_banner(client):
    body = (await client.get("/")).json()
    assert body["message"] == "Evolution API is running"
    assert body["endpoints"]["manager"] == "/manager"


async def test_security_headers_present(client):
    res = await client.get("/health")
    assert res.headers["x-content-type-options"] == "nosniff"
    assert res.headers["x-frame-options"] == "SAMEORIGIN"


async def test_encoding_failure_returns_500(client, gateway, monkeypatch):
    gateway.create_instance("gym")

    def fail(data):
        raise HandshakeEncodingError("simulated")

    monkeypatch.setattr(gateway.handshake.encoder, "encode_data_url", fail)
    res = await client.post("/instance/connect/gym")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "ENCODING_ERROR"
    assert gateway.get_instance("gym").status.value == "created"


async def test_renderer_failure_returns_encoding_error(client, gateway, monkeypatch):
    gateway.create_instance("gym")

    def broken_make_image(self, *args, **kwargs):
        raise TypeError("bad")

    monkeypatch.setattr(qrcode.QRCode, "make_image", broken_make_image)
    res = await client.post("/instance/connect/gym")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "ENCODING_ERROR"
    assert gateway.get_instance("gym").status.value == "created"
    assert gateway.scheduler.pending("gym") == ()


async def test_send_text_non_object_body_is_malformed(client):
    for payload in (["555", "hi"], "hi", 5, None):
        res = await client.post("/message/sendText/gym", json=payload)
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "MALFORMED_PAYLOAD"


async def test_send_text_invalid_json_is_malformed(client):
    res = await client.post(
        "/message/sendText/gym", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "MALFORMED_PAYLOAD"
    assert error["context"]["instance_id"] == "gym"


async def test_send_text_empty_body_is_malformed(client):
    res = await client.post("/message/sendText/gym")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MALFORMED_PAYLOAD"
