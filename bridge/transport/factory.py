# bridge/transport/factory.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from bridge.common.netdefs import DISCOVERY_PORT, DISCOVERY_TIMEOUT_MS, MAX_PORT, MIN_PORT
from bridge.core.errors import PortBindError, TransportConfigError
from bridge.model.config import PhoneClientConfig
from bridge.transport.errors import TransportBindError
from bridge.transport.udp import UdpTransport

CLIENT_PORT_FIELD = "phone_client.local_port"
DISCOVERY_PORT_FIELD = "discovery port (fixed)"


class UdpTransportFactory:
    """
    Provisions bound UDP transports for the two socket roles.

      - client:    phone_config.local_port, no receive timeout (the caller's
                   receive loop applies receive_timeout_ms itself)
      - discovery: DISCOVERY_PORT with a DISCOVERY_TIMEOUT_MS receive timeout,
                   meant for one listen and then close()

    Every returned transport is already bound and owned by the caller.
    Bind failures raise PortBindError; nothing is retried here.
    """

    def __init__(
        self,
        *,
        transport_cls: Callable[..., UdpTransport] = UdpTransport,
        logger: Optional[logging.Logger] = None,
    ):
        self._transport_cls = transport_cls
        self._log = logger or logging.getLogger(__name__)

    def create_for_client(self, phone_config: Optional[PhoneClientConfig]) -> UdpTransport:
        if phone_config is None:
            raise TransportConfigError(
                "Phone client configuration is missing.",
                hint="Add a 'phone_client' section to the application config.",
            )

        port = self._validate_port(getattr(phone_config, "local_port", None))
        transport = self._bind(port, timeout=None, field=CLIENT_PORT_FIELD)
        self._log.info("UDP_CLIENT_BOUND port=%d", port)
        return transport

    def create_for_port_discovery(self) -> UdpTransport:
        transport = self._bind(
            DISCOVERY_PORT,
            timeout=DISCOVERY_TIMEOUT_MS / 1000.0,
            field=DISCOVERY_PORT_FIELD,
        )
        self._log.debug("UDP_DISCOVERY_BOUND port=%d timeout_ms=%d", DISCOVERY_PORT, DISCOVERY_TIMEOUT_MS)
        return transport

    # ---------------------------------------------------------------------
    # internals
    # ---------------------------------------------------------------------
    def _bind(self, port: int, *, timeout: Optional[float], field: str) -> UdpTransport:
        transport = self._transport_cls(port, timeout=timeout)
        try:
            transport.open()
        except TransportBindError as e:
            self._log.warning("UDP_BIND_FAILED port=%d field=%s: %s", port, field, e.reason)
            transport.close()
            raise PortBindError(
                f"Could not bind UDP port {port} ({field}).",
                port=port,
                field=field,
                hint=self._bind_hint(field),
                details={"reason": e.reason},
            ) from None
        return transport

    @staticmethod
    def _bind_hint(field: str) -> str:
        if field == CLIENT_PORT_FIELD:
            return f"The port is in use or not permitted; choose another value for '{field}'."
        return "Another application (or a second bridge instance) is already listening for discovery."

    @staticmethod
    def _validate_port(value: Any) -> int:
        if value is None:
            raise TransportConfigError(
                f"'{CLIENT_PORT_FIELD}' is not set.",
                hint="Set a local UDP port for the phone client to bind.",
                details={"field": CLIENT_PORT_FIELD},
            )
        if isinstance(value, bool) or not isinstance(value, int) or not (MIN_PORT <= value <= MAX_PORT):
            raise TransportConfigError(
                f"Invalid value for '{CLIENT_PORT_FIELD}': {value!r}.",
                hint=f"Use an integer port in {MIN_PORT}..{MAX_PORT}.",
                details={"field": CLIENT_PORT_FIELD, "value": value},
            )
        return value
