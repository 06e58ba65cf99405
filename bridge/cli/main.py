# bridge/cli/main.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from bridge.core.context import Context
from bridge.core.errors import BridgeError

from bridge.cli.args import parse_args
from bridge.cli.commands import (
    configure_logging,
    cmd_commands,
    cmd_discover,
    cmd_edit,
)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(
        verbose=args.verbose,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        ctx = Context.load(args.config, platform=getattr(args, "platform", None))

        if args.cmd == "commands":
            return cmd_commands(ctx, rule_name=args.rule_name)
        if args.cmd == "discover":
            return cmd_discover(ctx)
        if args.cmd == "edit":
            return cmd_edit(ctx, target=args.target)

        return 2
    except BridgeError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
