# bridge/transport/errors.py
from __future__ import annotations

class TransportError(Exception):
    """Base class for transport-layer failures."""

class TransportOpenError(TransportError):
    pass

class TransportBindError(TransportOpenError):
    """Socket creation or bind() was rejected by the OS."""

    def __init__(self, port: int, reason: str):
        super().__init__(f"could not bind UDP port {port}: {reason}")
        self.port = int(port)
        self.reason = reason

class TransportIOError(TransportError):
    pass
