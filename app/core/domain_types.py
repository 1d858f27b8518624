"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InstanceId wraps str — instance ids are caller-chosen names, not UUIDs
    - InstanceStatus only moves forward: CREATED → CONNECTING → CONNECTED
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InstanceId = NewType("InstanceId", str)
MessageId = NewType("MessageId", str)


# ─── Enums ───────────────────────────────────────────────────────

class InstanceStatus(str, Enum):
    """Instance lifecycle states — one connect cycle walks them in order."""
    CREATED = "created"
    CONNECTING = "connecting"
    CONNECTED = "connected"
