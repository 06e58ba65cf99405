from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Datagram:
    data: bytes
    host: str
    port: int


class Transport(ABC):
    """
    Abstract datagram transport interface.

    Contract:
      - open()/close() manage the underlying socket. close() is terminal:
        a closed transport cannot be reopened.
      - receive(bufsize) returns one datagram, or None when the configured
        timeout elapses without traffic.
      - send_to(data, host, port) returns the number of bytes sent.
    """

    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def receive(self, bufsize: int = 4096) -> Optional[Datagram]: ...

    @abstractmethod
    def send_to(self, data: bytes, host: str, port: int) -> int: ...

    def __enter__(self) -> "Transport":
        self.open()
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()
