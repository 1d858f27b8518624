"""Domain Types — verifies identity wrappers and the status enum."""

from app.core.domain_types import InstanceId, InstanceStatus, MessageId


def test_identity_types_wrap_str():
    assert InstanceId("gym") == "gym"
    assert MessageId("m1") == "m1"


def test_instance_status_has_three_states():
    assert [s.value for s in InstanceStatus] == ["created", "connecting", "connected"]


def test_status_compares_to_wire_value():
    assert InstanceStatus.CONNECTED == "connected"
