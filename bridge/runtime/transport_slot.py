# bridge/runtime/transport_slot.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from bridge.common.comparers import phone_client_configs_equal
from bridge.model.config import PhoneClientConfig
from bridge.transport.factory import UdpTransportFactory
from bridge.transport.udp import UdpTransport


@dataclass
class ClientTransportSlot:
    """
    Owns the phone client's UDP transport across configuration reloads.

    Responsibilities:
      - compare an incoming PhoneClientConfig with the active one
      - on change: close the old transport, then provision a new one
      - close the transport on release()

    Between close() of the old transport and bind of the new one the port is
    briefly free, so another process could take it; the rebind then fails with
    PortBindError and the slot stays empty.

    Not thread-safe: callers serialise apply()/release() themselves.
    """

    factory: UdpTransportFactory
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self._log = self.logger or logging.getLogger(__name__)
        self._config: Optional[PhoneClientConfig] = None
        self._transport: Optional[UdpTransport] = None

    @property
    def config(self) -> Optional[PhoneClientConfig]:
        return self._config

    @property
    def is_bound(self) -> bool:
        return self._transport is not None and self._transport.is_open()

    @property
    def transport(self) -> UdpTransport:
        if self._transport is None:
            raise RuntimeError("ClientTransportSlot has no transport (apply() a config first)")
        return self._transport

    def apply(self, config: Optional[PhoneClientConfig]) -> bool:
        """
        Bring the slot in line with `config`.

        Returns True when the transport was replaced or released, False when
        the config is unchanged and the existing transport was kept.
        Raises PortBindError / TransportConfigError from the factory; the slot
        is left empty in that case.
        """
        if self.is_bound and phone_client_configs_equal(self._config, config):
            return False

        if config is None:
            had_transport = self._transport is not None
            self.release()
            return had_transport

        if self._transport is not None:
            self._log.info(
                "PHONE_CONFIG_CHANGED old_port=%s new_port=%d",
                self._config.local_port if self._config else None,
                config.local_port,
            )
        self.release()

        self._transport = self.factory.create_for_client(config)
        self._config = config
        return True

    def release(self) -> None:
        if self._transport is not None:
            try:
                self._transport.close()
            except Exception:
                self._log.exception("Failed to close client transport")
            self._transport = None
        self._config = None
