"""Error Hierarchy — verifies codes, statuses and the REST envelope.

Tests:
    - Each error type maps to its code, category and HTTP status
    - to_response() carries instance context
"""

from app.core.errors import (
    ErrorCategory, ErrorContext, GatewayError, HandshakeEncodingError,
    InstanceNotFoundError, MalformedPayloadError, ResourceNotFoundError,
)


def test_instance_not_found_is_resource_not_found():
    err = InstanceNotFoundError("gym")
    assert isinstance(err, ResourceNotFoundError)
    assert isinstance(err, GatewayError)
    assert err.code == "RESOURCE_NOT_FOUND"
    assert err.category == ErrorCategory.RESOURCE_NOT_FOUND
    assert err.http_status == 404
    assert err.message == "Instance 'gym' not found"


def test_instance_not_found_fills_context():
    err = InstanceNotFoundError("gym", ErrorContext(operation="connect"))
    body = err.to_response()["error"]
    assert body["context"] == {"instance_id": "gym", "operation": "connect"}


def test_malformed_payload_is_400():
    err = MalformedPayloadError("textMessage.text is required", "textMessage.text")
    assert err.http_status == 400
    assert err.code == "MALFORMED_PAYLOAD"
    assert err.field == "textMessage.text"


def test_encoding_error_is_500():
    err = HandshakeEncodingError("boom")
    assert err.http_status == 500
    assert err.code == "ENCODING_ERROR"
    assert err.category == ErrorCategory.ENCODING


def test_response_envelope_keys():
    body = MalformedPayloadError("bad", "number").to_response()
    assert set(body["error"]) == {
        "code", "message", "category", "severity", "timestamp", "context",
    }
    assert body["error"]["category"] == "validation"
