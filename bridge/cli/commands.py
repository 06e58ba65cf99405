# bridge/cli/commands.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from bridge.app.editor import ExternalEditor
from bridge.common.logging_config import DEFAULTS
from bridge.common.netdefs import DISCOVERY_PORT
from bridge.core.context import Context
from bridge.model.config import GeneralSettings, TransformationEngineConfig
from bridge.runtime.port_discovery import PortDiscoveryListener

# ---------------- Logging ----------------

def configure_logging(*, verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Console handler on the root logger plus an optional file handler (idempotent).
    Kept in CLI (presentation-layer concern).
    """
    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.WARNING

    if not any(getattr(h, "_bridge_console", False) for h in root.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(DEFAULTS.console_format))
        ch._bridge_console = True  # type: ignore[attr-defined]
        root.addHandler(ch)
    for h in root.handlers:
        if getattr(h, "_bridge_console", False):
            h.setLevel(level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        target = str(log_file.resolve())
        if not any(
            isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target
            for h in root.handlers
        ):
            fh = logging.FileHandler(log_file, encoding="utf-8", delay=True)
            fh.setLevel(logging.INFO)
            fh.setFormatter(logging.Formatter(DEFAULTS.file_format))
            root.addHandler(fh)

    wanted = min(level, logging.INFO) if log_file is not None else level
    if root.level == logging.NOTSET or root.level > wanted:
        root.setLevel(wanted)

# ---------------- Commands ----------------

def cmd_commands(ctx: Context, *, rule_name: str) -> int:
    cmds = ctx.commands
    phone = ctx.config.phone_client
    pc = ctx.config.pc_client

    print(f"Platform: {cmds.platform_name()}")
    print()

    if phone is not None:
        name = f"{rule_name} (phone)"
        print(f"# Allow tracking data from the phone on UDP {phone.local_port}")
        print(
            cmds.add_firewall_rule_command(
                name,
                "in",
                "allow",
                "UDP",
                local_port=str(phone.local_port),
                remote_address=phone.device_address or None,
            )
        )
        print(cmds.remove_firewall_rule_command(name))
        print(cmds.check_port_status_command(str(phone.local_port), "UDP"))
        if phone.device_address:
            print(cmds.test_connectivity_command(phone.device_address, str(phone.device_port)))
        print()
    else:
        print("# phone_client not configured")
        print()

    if pc is not None:
        if pc.use_port_discovery:
            name = f"{rule_name} (discovery)"
            print(f"# Allow VTube Studio discovery broadcasts on UDP {DISCOVERY_PORT}")
            print(cmds.add_firewall_rule_command(name, "in", "allow", "UDP", local_port=str(DISCOVERY_PORT)))
            print(cmds.remove_firewall_rule_command(name))
            print(cmds.check_port_status_command(str(DISCOVERY_PORT), "UDP"))
        print(f"# VTube Studio API at {pc.host}:{pc.port}")
        print(cmds.test_connectivity_command(pc.host, str(pc.port)))
    else:
        print("# pc_client not configured")

    return 0


def cmd_discover(ctx: Context) -> int:
    listener = PortDiscoveryListener(ctx.transport_factory)
    found = listener.discover()
    if found is None:
        print(f"No VTube Studio instance announced itself on UDP {DISCOVERY_PORT}.")
        return 1

    print(f"VTube Studio: instance={found.instance_id} title={found.window_title!r} api_port={found.port}")
    return 0


def cmd_edit(ctx: Context, *, target: str) -> int:
    settings = ctx.config.general_settings or GeneralSettings()
    editor = ExternalEditor(settings, ctx.launcher)

    if target == "config":
        path = ctx.config.source_path or ""
    else:
        path = (ctx.config.transformation_engine or TransformationEngineConfig()).config_path

    if editor.open_file(path, label=f"{target} file"):
        return 0

    print(f"Could not open {target} file {path!r} in the editor.")
    command = editor.command_for(path)
    if command is not None:
        print("Run manually:")
        print(f"  {command.as_text()}")
    else:
        print("Hint: set general_settings.editor_command (use %f for the file path).")
    return 1
