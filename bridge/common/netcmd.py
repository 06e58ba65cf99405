# bridge/common/netcmd.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from bridge.core.errors import CommandProviderError


class NetworkCommandProvider(ABC):
    """
    Copy-paste ready network commands for one platform's default shell.

    Pure string formatting: nothing here executes a command. Rule names are
    quoted by the provider; direction/action/protocol tokens go in verbatim.
    """

    @abstractmethod
    def platform_name(self) -> str: ...

    @abstractmethod
    def add_firewall_rule_command(
        self,
        rule_name: str,
        direction: str,
        action: str,
        protocol: str,
        local_port: Optional[str] = None,
        remote_port: Optional[str] = None,
        remote_address: Optional[str] = None,
    ) -> str: ...

    @abstractmethod
    def remove_firewall_rule_command(self, rule_name: str) -> str: ...

    @abstractmethod
    def check_port_status_command(self, port: str, protocol: str) -> str: ...

    @abstractmethod
    def test_connectivity_command(self, host: str, port: str) -> str: ...


class WindowsNetworkCommandProvider(NetworkCommandProvider):
    def platform_name(self) -> str:
        return "Windows"

    def add_firewall_rule_command(
        self,
        rule_name: str,
        direction: str,
        action: str,
        protocol: str,
        local_port: Optional[str] = None,
        remote_port: Optional[str] = None,
        remote_address: Optional[str] = None,
    ) -> str:
        command = (
            f'netsh advfirewall firewall add rule name="{rule_name}" '
            f"dir={direction} action={action} protocol={protocol}"
        )
        if local_port:
            command += f" localport={local_port}"
        if remote_port:
            command += f" remoteport={remote_port}"
        if remote_address:
            command += f" remoteip={remote_address}"
        return command

    def remove_firewall_rule_command(self, rule_name: str) -> str:
        return f'netsh advfirewall firewall delete rule name="{rule_name}"'

    def check_port_status_command(self, port: str, protocol: str) -> str:
        # netstat -an lists both protocols; findstr on the port is enough
        return f"netstat -an | findstr :{port}"

    def test_connectivity_command(self, host: str, port: str) -> str:
        return f"Test-NetConnection -ComputerName {host} -Port {port} -InformationLevel Detailed"


class LinuxNetworkCommandProvider(NetworkCommandProvider):
    """
    iptables rules tagged with a comment holding the rule name, so removal can
    filter on it.
    """

    _CHAINS = {"in": "INPUT", "out": "OUTPUT"}
    _TARGETS = {"allow": "ACCEPT", "block": "DROP"}

    def platform_name(self) -> str:
        return "Linux"

    def add_firewall_rule_command(
        self,
        rule_name: str,
        direction: str,
        action: str,
        protocol: str,
        local_port: Optional[str] = None,
        remote_port: Optional[str] = None,
        remote_address: Optional[str] = None,
    ) -> str:
        inbound = direction.lower() != "out"
        chain = self._CHAINS.get(direction.lower(), direction)
        target = self._TARGETS.get(action.lower(), action)

        command = f"sudo iptables -A {chain} -p {protocol.lower()}"
        if remote_address:
            command += f" {'-s' if inbound else '-d'} {remote_address}"
        if local_port:
            command += f" {'--dport' if inbound else '--sport'} {local_port}"
        if remote_port:
            command += f" {'--sport' if inbound else '--dport'} {remote_port}"
        command += f' -m comment --comment "{rule_name}" -j {target}'
        return command

    def remove_firewall_rule_command(self, rule_name: str) -> str:
        # turn every matching -A line into a -D and replay it
        return f"sudo iptables -S | grep -F -- '{rule_name}' | sed 's/^-A /-D /' | xargs -r -L1 sudo iptables"

    def check_port_status_command(self, port: str, protocol: str) -> str:
        flag = "-uan" if protocol.lower() == "udp" else "-tan"
        return f"ss {flag} | grep :{port}"

    def test_connectivity_command(self, host: str, port: str) -> str:
        return f"nc -vz -w 3 {host} {port}"


class NetworkCommandProviderRegistry:
    """
    Maps platform keys (sys.platform prefixes) -> provider classes.

    for_platform() is called when command text is needed; providers are
    stateless and cheap to build.
    """

    def __init__(self, providers: Dict[str, Type[NetworkCommandProvider]]):
        self._providers: Dict[str, Type[NetworkCommandProvider]] = {
            k.lower(): v for k, v in providers.items()
        }

    @classmethod
    def default(cls) -> "NetworkCommandProviderRegistry":
        return cls(
            providers={
                "win32": WindowsNetworkCommandProvider,
                "cygwin": WindowsNetworkCommandProvider,
                "linux": LinuxNetworkCommandProvider,
            }
        )

    def platforms(self) -> list[str]:
        return sorted(self._providers)

    def has(self, platform: str) -> bool:
        return self._match(platform) is not None

    def for_platform(self, platform: str) -> NetworkCommandProvider:
        provider_cls = self._match(platform)
        if provider_cls is None:
            raise CommandProviderError(
                f"No network command provider for platform '{platform}'.",
                hint=f"Supported platforms: {', '.join(self.platforms())}",
                details={"platform": platform},
            )
        return provider_cls()

    def _match(self, platform: str) -> Optional[Type[NetworkCommandProvider]]:
        key = platform.lower()
        if key in self._providers:
            return self._providers[key]
        # prefix match, e.g. "freebsd14" -> "freebsd"
        for name, provider_cls in self._providers.items():
            if key.startswith(name):
                return provider_cls
        return None
