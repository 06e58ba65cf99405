# bridge/common/comparers.py
"""
Explicit field-by-field equality for configuration value objects.

Used to decide whether a reloaded configuration section actually changed and
the resources built from it (UDP sockets, editor settings) must be rebuilt.
Instances reconstructed independently from the same file compare equal; None
only equals None.
"""

from __future__ import annotations

from typing import Mapping, Optional

from bridge.model.config import (
    GeneralSettings,
    PCClientConfig,
    PhoneClientConfig,
    TransformationEngineConfig,
)


def phone_client_configs_equal(
    x: Optional[PhoneClientConfig], y: Optional[PhoneClientConfig]
) -> bool:
    if x is y:
        return True
    if x is None or y is None:
        return False

    return (
        x.device_address == y.device_address
        and x.device_port == y.device_port
        and x.local_port == y.local_port
        and x.request_interval_seconds == y.request_interval_seconds
        and x.send_for_seconds == y.send_for_seconds
        and x.receive_timeout_ms == y.receive_timeout_ms
        and x.error_delay_ms == y.error_delay_ms
    )


def pc_client_configs_equal(x: Optional[PCClientConfig], y: Optional[PCClientConfig]) -> bool:
    if x is y:
        return True
    if x is None or y is None:
        return False

    return (
        x.host == y.host
        and x.port == y.port
        and x.plugin_name == y.plugin_name
        and x.plugin_developer == y.plugin_developer
        and x.token_file_path == y.token_file_path
        and x.connection_timeout_ms == y.connection_timeout_ms
        and x.reconnection_delay_ms == y.reconnection_delay_ms
        and x.use_port_discovery == y.use_port_discovery
    )


def shortcuts_equal(x: Optional[Mapping[str, str]], y: Optional[Mapping[str, str]]) -> bool:
    """Order-independent mapping equality; an absent mapping never equals an empty one."""
    if x is y:
        return True
    if x is None or y is None:
        return False
    if len(x) != len(y):
        return False

    for key, value in x.items():
        if key not in y or y[key] != value:
            return False
    return True


def general_settings_equal(x: Optional[GeneralSettings], y: Optional[GeneralSettings]) -> bool:
    if x is y:
        return True
    if x is None or y is None:
        return False

    if x.editor_command != y.editor_command:
        return False
    return shortcuts_equal(x.shortcuts, y.shortcuts)


def transformation_engine_configs_equal(
    x: Optional[TransformationEngineConfig], y: Optional[TransformationEngineConfig]
) -> bool:
    if x is y:
        return True
    if x is None or y is None:
        return False

    return (
        x.config_path == y.config_path
        and x.max_evaluation_iterations == y.max_evaluation_iterations
    )
