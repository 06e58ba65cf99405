# bridge/common/process.py
from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Any, Dict, List, Optional, Union


class ProcessLauncher:
    """
    Fire-and-forget launcher for helper tools (external editor, diagnostics).

    try_start_process() returns as soon as the OS reports the child started and
    never raises: a missing binary, denied permission or malformed argument
    string all come back as False. The child is detached (own session / process
    group, stdio to DEVNULL) and no reference to it is kept.
    """

    def __init__(self, *, windows: Optional[bool] = None, logger: Optional[logging.Logger] = None):
        self._windows = (os.name == "nt") if windows is None else bool(windows)
        self._log = logger or logging.getLogger(__name__)
        self.last_started_pid: Optional[int] = None

    def try_start_process(self, executable: str, arguments: Optional[str] = None) -> bool:
        if not executable or not executable.strip():
            self._log.warning("PROCESS_LAUNCH_SKIPPED reason=empty_executable")
            return False

        try:
            args = self.build_command(executable, arguments or "")
            proc = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
                **self._detach_kwargs(),
            )
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            self._log.warning("PROCESS_LAUNCH_FAILED executable=%s: %s", executable, e)
            return False

        self.last_started_pid = proc.pid
        self._log.info("PROCESS_STARTED executable=%s pid=%s", executable, proc.pid)
        return True

    def build_command(self, executable: str, arguments: str) -> Union[str, List[str]]:
        """
        Windows: one command line string, arguments passed through verbatim.
        POSIX: argv list, arguments split with shell word rules.
        """
        if self._windows:
            cmdline = subprocess.list2cmdline([executable])
            return f"{cmdline} {arguments}" if arguments else cmdline
        return [executable, *shlex.split(arguments)]

    def _detach_kwargs(self) -> Dict[str, Any]:
        if self._windows:
            return {"creationflags": getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0)}
        return {"start_new_session": True}
