# bridge/core/errors.py
from __future__ import annotations


class BridgeError(Exception):
    """
    Base class for all expected operational errors in the bridge.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, UI messages, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration errors (no OS resources touched yet)
# ---------------------------------------------------------------------------

class ConfigLoadError(BridgeError):
    """
    Application configuration could not be read.

    Examples:
      - config file missing
      - malformed YAML
      - section is not a mapping / unknown field
    """
    code = "config_load_error"


class TransportConfigError(BridgeError):
    """
    Provisioning input is invalid.

    Examples:
      - phone client config absent
      - local_port missing or outside 1..65535
    """
    code = "transport_config_error"


class CommandProviderError(BridgeError):
    """
    No network command provider is registered for the host platform.
    """
    code = "command_provider_error"


# ---------------------------------------------------------------------------
# Transport lifecycle errors
# ---------------------------------------------------------------------------

class PortBindError(BridgeError):
    """
    A UDP socket could not be bound to the requested local port.

    Examples:
      - port already in use by another handle or process
      - permission denied (privileged port, firewall policy)
      - socket creation rejected by the OS

    Fatal for the call that raised it; the caller decides whether to retry with
    another port or surface the message.
    """
    code = "port_bind_error"

    def __init__(
        self,
        message: str,
        *,
        port: int,
        field: str,
        hint: str | None = None,
        details: dict | None = None,
    ):
        merged = {"port": int(port), "field": field}
        merged.update(details or {})
        super().__init__(message, hint=hint, details=merged)
        self.port = int(port)
        self.field = field
