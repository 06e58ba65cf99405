# bridge/transport/udp.py
from __future__ import annotations

import socket
from enum import Enum
from typing import Optional

from bridge.common.netdefs import BIND_ALL_INTERFACES

from .base import Datagram, Transport
from .errors import TransportBindError, TransportError, TransportIOError


class TransportState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"
    RELEASED = "released"


class UdpTransport(Transport):
    """
    One bound UDP socket plus its receive timeout.

    Lifecycle: UNBOUND -> BOUND (open) -> RELEASED (close). RELEASED is terminal;
    a different port or timeout policy means a new UdpTransport.

    timeout is in seconds; None blocks indefinitely. receive() returns None
    when the timeout elapses.
    """

    def __init__(
        self,
        port: int,
        *,
        host: str = BIND_ALL_INTERFACES,
        timeout: Optional[float] = None,
    ):
        self.port = int(port)
        self.host = host
        self.timeout = timeout
        self.sock: Optional[socket.socket] = None
        self._state = TransportState.UNBOUND

    # --- state ---
    @property
    def state(self) -> TransportState:
        return self._state

    def is_open(self) -> bool:
        return self._state is TransportState.BOUND and self.sock is not None

    @property
    def local_port(self) -> int:
        """Port the socket is bound to (the requested port until bound)."""
        if self.sock is not None:
            return int(self.sock.getsockname()[1])
        return self.port

    # --- lifecycle ---
    def open(self) -> None:
        if self._state is TransportState.BOUND:
            return
        if self._state is TransportState.RELEASED:
            raise TransportError("cannot reopen a released UDP transport")

        sock: Optional[socket.socket] = None
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.bind((self.host, self.port))
            sock.settimeout(self.timeout)
        except OSError as e:
            if sock is not None:
                sock.close()
            raise TransportBindError(self.port, str(e)) from None

        self.sock = sock
        self._state = TransportState.BOUND

    def close(self) -> None:
        if self.sock is not None:
            try:
                self.sock.close()
            finally:
                self.sock = None
        self._state = TransportState.RELEASED

    def set_timeout(self, timeout: Optional[float]) -> None:
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be >= 0 or None")
        self.timeout = timeout
        if self.sock is not None:
            self.sock.settimeout(timeout)

    # --- I/O ---
    def receive(self, bufsize: int = 4096) -> Optional[Datagram]:
        if self.sock is None:
            raise TransportIOError(f"receive while transport {self._state.value}")

        try:
            data, addr = self.sock.recvfrom(bufsize)
        except socket.timeout:
            return None
        except OSError as e:
            raise TransportIOError(f"UDP receive failed on port {self.port}: {e}") from None

        return Datagram(data=data, host=str(addr[0]), port=int(addr[1]))

    def send_to(self, data: bytes, host: str, port: int) -> int:
        if self.sock is None:
            raise TransportIOError(f"send while transport {self._state.value}")

        try:
            return self.sock.sendto(data, (host, int(port)))
        except OSError as e:
            raise TransportIOError(f"UDP send to {host}:{port} failed: {e}") from None

    def __repr__(self) -> str:
        return f"UdpTransport(port={self.port}, timeout={self.timeout}, state={self._state.value})"
