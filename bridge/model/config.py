# bridge/model/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class PhoneClientConfig:
    """
    Settings for the UDP link to VTube Studio running on the phone.

    local_port is the port this machine binds to receive tracking data;
    receive_timeout_ms is policy for the caller's receive loop, it is not
    applied when the socket is provisioned.
    """
    device_address: str = ""
    device_port: int = 21412
    local_port: int = 28964
    request_interval_seconds: float = 3.0
    send_for_seconds: float = 4
    receive_timeout_ms: int = 250
    error_delay_ms: int = 1000


@dataclass(frozen=True)
class PCClientConfig:
    host: str = "localhost"
    port: int = 8001
    plugin_name: str = "SharpBridge"
    plugin_developer: str = "Dimak@Shift"
    token_file_path: str = "auth_token.txt"
    connection_timeout_ms: int = 5000
    reconnection_delay_ms: int = 2000
    use_port_discovery: bool = True


@dataclass(frozen=True)
class GeneralSettings:
    """
    editor_command uses %f as the file path placeholder.
    shortcuts maps action name -> key combination; None means "not configured",
    which is distinct from an empty mapping. The loader hands out a read-only
    mapping.

    Unhashable: shortcuts is a mapping, so compare with general_settings_equal
    and do not use instances as dict keys or set members.
    """
    editor_command: str = 'notepad.exe "%f"'
    shortcuts: Optional[Mapping[str, str]] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class TransformationEngineConfig:
    config_path: str = "Configs/vts_transforms.json"
    max_evaluation_iterations: int = 10


@dataclass(frozen=True)
class ApplicationConfig:
    general_settings: Optional[GeneralSettings] = None
    phone_client: Optional[PhoneClientConfig] = None
    pc_client: Optional[PCClientConfig] = None
    transformation_engine: Optional[TransformationEngineConfig] = None
    source_path: Optional[str] = None
