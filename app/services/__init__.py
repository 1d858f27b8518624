"""Services Layer — handshake, lifecycle scheduling, messaging and the gateway facade.

Invariants:
    - Services own the async behavior; core/ stays synchronous and pure
    - Every component receives its registry explicitly (no module-level state)

Design Decisions:
    - One file per component, composed by InstanceGateway
"""
