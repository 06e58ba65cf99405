# bridge/runtime/port_discovery.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional

from bridge.common.netdefs import DISCOVERY_BUFSIZE
from bridge.core.errors import BridgeError
from bridge.transport.errors import TransportError
from bridge.transport.factory import UdpTransportFactory

EXPECTED_WINDOW_TITLE = "VTube Studio"


@dataclass(frozen=True)
class DiscoveryResponse:
    active: bool
    port: int
    instance_id: str
    window_title: str

    @classmethod
    def from_json(cls, payload: bytes) -> "DiscoveryResponse":
        """Decode a VTube Studio API envelope; the announcement lives under "data"."""
        envelope = json.loads(payload.decode("utf-8"))
        if not isinstance(envelope, dict):
            raise ValueError("discovery payload must be a JSON object")
        data = envelope.get("data")
        if not isinstance(data, dict):
            raise ValueError("discovery payload has no \"data\" object")
        return cls(
            active=bool(data.get("active", False)),
            port=int(data.get("port", 0)),
            instance_id=str(data.get("instanceID") or ""),
            window_title=str(data.get("windowTitle") or ""),
        )

    def looks_like_vtube_studio(self) -> bool:
        return (
            bool(self.instance_id)
            and bool(self.window_title)
            and self.window_title.lower().startswith(EXPECTED_WINDOW_TITLE.lower())
        )


class PortDiscoveryListener:
    """
    One-shot listen for the VTube Studio API announcement on the discovery port.

    discover() binds a discovery transport, waits for a single datagram (bounded
    by the transport's fixed receive timeout) and always closes the transport
    before returning. Every failure mode is logged and reported as None.
    """

    def __init__(self, factory: UdpTransportFactory, *, logger: Optional[logging.Logger] = None):
        self._factory = factory
        self._log = logger or logging.getLogger(__name__)

    def discover(self) -> Optional[DiscoveryResponse]:
        try:
            transport = self._factory.create_for_port_discovery()
        except BridgeError as e:
            self._log.warning("DISCOVERY_BIND_FAILED code=%s msg=%s", e.code, e.message)
            return None

        with transport:
            try:
                datagram = transport.receive(DISCOVERY_BUFSIZE)
            except TransportError as e:
                self._log.error("DISCOVERY_RECEIVE_FAILED: %s", e)
                return None

        if datagram is None:
            self._log.warning("DISCOVERY_TIMEOUT timeout_s=%s", transport.timeout)
            return None

        try:
            response = DiscoveryResponse.from_json(datagram.data)
        except (ValueError, TypeError) as e:
            self._log.warning("DISCOVERY_DECODE_FAILED from=%s: %s", datagram.host, e)
            return None

        if not response.active:
            self._log.warning("DISCOVERY_INACTIVE from=%s", datagram.host)
            return None

        if not response.looks_like_vtube_studio():
            self._log.warning(
                "DISCOVERY_UNEXPECTED_SERVICE from=%s title=%r", datagram.host, response.window_title
            )
            return None

        self._log.info(
            "DISCOVERY_FOUND instance=%s title=%r port=%d",
            response.instance_id,
            response.window_title,
            response.port,
        )
        return response
