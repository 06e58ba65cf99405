# bridge/cli/args.py
from __future__ import annotations

import argparse
from typing import Optional

DEFAULT_CONFIG_PATH = "config.yml"
DEFAULT_RULE_NAME = "VTS Bridge"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vts-bridge", description="Network diagnostics for the VTube Studio bridge.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Application config YAML.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_cmds = sub.add_parser("commands", help="Print firewall / port / connectivity commands.")
    p_cmds.add_argument("--rule-name", default=DEFAULT_RULE_NAME)
    p_cmds.add_argument(
        "--platform",
        default=None,
        help="Generate commands for this platform (default: this machine).",
    )

    sub.add_parser("discover", help="Listen once for a VTube Studio discovery broadcast.")

    p_edit = sub.add_parser("edit", help="Open a config file in the configured editor.")
    p_edit.add_argument("target", choices=("config", "transforms"))

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
