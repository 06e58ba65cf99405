from __future__ import annotations

import pytest

from bridge.common.netcmd import (
    LinuxNetworkCommandProvider,
    NetworkCommandProviderRegistry,
    WindowsNetworkCommandProvider,
)
from bridge.core.errors import CommandProviderError


def test_windows_add_rule_with_local_port_only():
    cmd = WindowsNetworkCommandProvider().add_firewall_rule_command(
        "MyRule", "in", "allow", "UDP", local_port="9000"
    )

    assert cmd == 'netsh advfirewall firewall add rule name="MyRule" dir=in action=allow protocol=UDP localport=9000'
    assert 'name="MyRule"' in cmd
    assert "remoteport=" not in cmd
    assert "remoteip=" not in cmd


def test_windows_add_rule_with_all_optional_parts():
    cmd = WindowsNetworkCommandProvider().add_firewall_rule_command(
        "Phone", "out", "block", "TCP",
        local_port="1", remote_port="2", remote_address="10.0.0.5",
    )
    assert cmd.endswith("localport=1 remoteport=2 remoteip=10.0.0.5")
    assert "dir=out action=block protocol=TCP" in cmd


def test_windows_empty_optionals_are_omitted():
    cmd = WindowsNetworkCommandProvider().add_firewall_rule_command(
        "R", "in", "allow", "UDP", local_port="", remote_port=None, remote_address=""
    )
    assert cmd.endswith("protocol=UDP")


def test_windows_other_commands():
    p = WindowsNetworkCommandProvider()
    assert p.platform_name() == "Windows"
    assert p.remove_firewall_rule_command("My Rule") == 'netsh advfirewall firewall delete rule name="My Rule"'
    assert p.check_port_status_command("28964", "UDP") == "netstat -an | findstr :28964"
    assert (
        p.test_connectivity_command("localhost", "8001")
        == "Test-NetConnection -ComputerName localhost -Port 8001 -InformationLevel Detailed"
    )


def test_linux_inbound_rule():
    cmd = LinuxNetworkCommandProvider().add_firewall_rule_command(
        "MyRule", "in", "allow", "UDP", local_port="9000", remote_address="192.168.1.20"
    )
    assert cmd == (
        'sudo iptables -A INPUT -p udp -s 192.168.1.20 --dport 9000 '
        '-m comment --comment "MyRule" -j ACCEPT'
    )


def test_linux_outbound_block_rule():
    cmd = LinuxNetworkCommandProvider().add_firewall_rule_command(
        "R", "out", "block", "TCP", remote_port="443"
    )
    assert cmd == 'sudo iptables -A OUTPUT -p tcp --dport 443 -m comment --comment "R" -j DROP'


def test_linux_other_commands():
    p = LinuxNetworkCommandProvider()
    assert p.platform_name() == "Linux"
    assert p.remove_firewall_rule_command("R") == (
        "sudo iptables -S | grep -F -- 'R' | sed 's/^-A /-D /' | xargs -r -L1 sudo iptables"
    )
    assert p.check_port_status_command("47779", "UDP") == "ss -uan | grep :47779"
    assert p.check_port_status_command("8001", "TCP") == "ss -tan | grep :8001"
    assert p.test_connectivity_command("h", "1") == "nc -vz -w 3 h 1"


@pytest.mark.parametrize(
    "platform, expected",
    [
        ("win32", WindowsNetworkCommandProvider),
        ("WIN32", WindowsNetworkCommandProvider),
        ("cygwin", WindowsNetworkCommandProvider),
        ("linux", LinuxNetworkCommandProvider),
    ],
)
def test_registry_selects_provider(platform, expected):
    reg = NetworkCommandProviderRegistry.default()
    assert reg.has(platform) is True
    assert isinstance(reg.for_platform(platform), expected)


def test_registry_unknown_platform_raises():
    reg = NetworkCommandProviderRegistry.default()
    assert reg.has("darwin") is False

    with pytest.raises(CommandProviderError) as ei:
        reg.for_platform("darwin")

    assert ei.value.code == "command_provider_error"
    assert "linux" in (ei.value.hint or "")


def test_registry_prefix_match():
    reg = NetworkCommandProviderRegistry({"freebsd": LinuxNetworkCommandProvider})
    assert isinstance(reg.for_platform("freebsd14"), LinuxNetworkCommandProvider)
