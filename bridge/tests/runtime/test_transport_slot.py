from __future__ import annotations

from dataclasses import replace

import pytest

from bridge.core.errors import PortBindError
from bridge.model.config import PhoneClientConfig
from bridge.runtime.transport_slot import ClientTransportSlot
from bridge.transport.udp import TransportState, UdpTransport


class FakeFactory:
    """Hands out bound-looking transports and records the order of events."""

    def __init__(self):
        self.created: list[UdpTransport] = []
        self.events: list[str] = []
        self.fail_ports: set[int] = set()

    def create_for_client(self, cfg: PhoneClientConfig) -> UdpTransport:
        if cfg.local_port in self.fail_ports:
            raise PortBindError("busy", port=cfg.local_port, field="phone_client.local_port")

        events = self.events
        t = UdpTransport(cfg.local_port)
        t._state = TransportState.BOUND
        t.sock = object()  # type: ignore[assignment]

        def close(_t=t):
            events.append(f"close:{_t.port}")
            _t.sock = None
            _t._state = TransportState.RELEASED

        t.close = close  # type: ignore[method-assign]
        self.events.append(f"create:{cfg.local_port}")
        self.created.append(t)
        return t


@pytest.fixture
def factory():
    return FakeFactory()


def test_first_apply_provisions(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    assert slot.is_bound is False

    assert slot.apply(PhoneClientConfig(local_port=40000)) is True
    assert slot.is_bound is True
    assert slot.transport.port == 40000
    assert factory.events == ["create:40000"]


def test_structurally_equal_config_keeps_transport(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    slot.apply(PhoneClientConfig(device_address="10.0.0.2", local_port=40000))
    first = slot.transport

    # independently rebuilt but identical
    changed = slot.apply(PhoneClientConfig(device_address="10.0.0.2", local_port=40000))

    assert changed is False
    assert slot.transport is first
    assert factory.events == ["create:40000"]


def test_changed_config_releases_before_rebinding(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    cfg = PhoneClientConfig(local_port=40000)
    slot.apply(cfg)
    old = slot.transport

    assert slot.apply(replace(cfg, local_port=40001)) is True

    assert factory.events == ["create:40000", "close:40000", "create:40001"]
    assert old.state is TransportState.RELEASED
    assert slot.transport.port == 40001


def test_non_port_change_still_rebinds_same_port(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    cfg = PhoneClientConfig(local_port=40000)
    slot.apply(cfg)

    assert slot.apply(replace(cfg, receive_timeout_ms=999)) is True
    assert factory.events == ["create:40000", "close:40000", "create:40000"]


def test_apply_none_releases(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    slot.apply(PhoneClientConfig(local_port=40000))

    assert slot.apply(None) is True
    assert slot.is_bound is False
    assert slot.config is None
    assert slot.apply(None) is False


def test_bind_failure_leaves_slot_empty_and_retryable(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    slot.apply(PhoneClientConfig(local_port=40000))
    factory.fail_ports = {40001}

    with pytest.raises(PortBindError):
        slot.apply(PhoneClientConfig(local_port=40001))

    assert slot.is_bound is False
    assert slot.config is None
    with pytest.raises(RuntimeError):
        _ = slot.transport

    factory.fail_ports = set()
    assert slot.apply(PhoneClientConfig(local_port=40001)) is True
    assert slot.is_bound is True


def test_release_closes_transport(factory):
    slot = ClientTransportSlot(factory)  # type: ignore[arg-type]
    slot.apply(PhoneClientConfig(local_port=40000))
    t = slot.transport

    slot.release()
    slot.release()

    assert t.state is TransportState.RELEASED
    assert factory.events.count("close:40000") == 1


def test_real_sockets_rebind_on_port_change():
    from bridge.transport.factory import UdpTransportFactory

    def free_port() -> int:
        probe = UdpTransport(0)
        probe.open()
        try:
            return probe.local_port
        finally:
            probe.close()

    slot = ClientTransportSlot(UdpTransportFactory())
    try:
        p1 = free_port()
        slot.apply(PhoneClientConfig(local_port=p1))
        assert slot.transport.local_port == p1

        p2 = free_port()
        slot.apply(PhoneClientConfig(local_port=p2))
        assert slot.transport.local_port == p2

        # p1 was released and can be bound again
        again = UdpTransport(p1)
        again.open()
        again.close()
    finally:
        slot.release()
