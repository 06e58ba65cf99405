# bridge/core/context.py
from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from bridge.common.netcmd import NetworkCommandProvider, NetworkCommandProviderRegistry
from bridge.common.process import ProcessLauncher
from bridge.model.config import ApplicationConfig
from bridge.model.loader import ConfigLoader
from bridge.transport.factory import UdpTransportFactory

from bridge.core.errors import ConfigLoadError


@dataclass(frozen=True)
class Context:
    config: ApplicationConfig
    transport_factory: UdpTransportFactory
    launcher: ProcessLauncher
    command_providers: NetworkCommandProviderRegistry
    platform: str

    @property
    def commands(self) -> NetworkCommandProvider:
        """
        Command text provider for `platform`.

        Raises CommandProviderError on an unsupported platform; only the
        command-text flows touch this, so the rest of the CLI keeps working.
        """
        return self.command_providers.for_platform(self.platform)

    @classmethod
    def load(
        cls,
        config_path: str | Path,
        *,
        platform: Optional[str] = None,
        providers: Optional[NetworkCommandProviderRegistry] = None,
        launcher: Optional[ProcessLauncher] = None,
        transport_factory: Optional[UdpTransportFactory] = None,
    ) -> "Context":
        """
        Load the application config and wire the services around it.

        `platform` defaults to sys.platform. Collaborators are injectable for tests.
        """
        config_path = Path(config_path)

        try:
            config = ConfigLoader(config_path).load()
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            raise ConfigLoadError(
                "Failed to load application config.",
                hint=str(e),
                details={"config_path": str(config_path)},
            ) from None

        return cls(
            config=config,
            transport_factory=transport_factory or UdpTransportFactory(),
            launcher=launcher or ProcessLauncher(),
            command_providers=providers or NetworkCommandProviderRegistry.default(),
            platform=platform or sys.platform,
        )
