# bridge/app/editor.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bridge.common.comparers import general_settings_equal
from bridge.common.process import ProcessLauncher
from bridge.model.config import GeneralSettings

FILE_PLACEHOLDER = "%f"

# executable (quoted or bare) followed by an optional argument tail
_COMMAND_RE = re.compile(r'^(?:"(?P<quoted>[^"]+)"|(?P<bare>[^\s"\']+))(?:\s+(?P<args>.*))?$')


@dataclass(frozen=True)
class EditorCommand:
    executable: str
    arguments: str

    def as_text(self) -> str:
        exe = f'"{self.executable}"' if " " in self.executable else self.executable
        return f"{exe} {self.arguments}".rstrip()


def parse_editor_command(command_line: str) -> Optional[EditorCommand]:
    """Split a command line into executable + argument string, None if malformed."""
    m = _COMMAND_RE.match(command_line.strip())
    if not m:
        return None
    executable = m.group("quoted") or m.group("bare")
    return EditorCommand(executable=executable, arguments=(m.group("args") or "").strip())


class ExternalEditor:
    """
    Opens configuration files in the user's editor via ProcessLauncher.

    open_file() is best-effort: it returns False (and logs why) instead of
    raising. command_for() gives the exact command text so the caller can show
    it when the launch fails.
    """

    def __init__(
        self,
        settings: GeneralSettings,
        launcher: ProcessLauncher,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings
        self._launcher = launcher
        self._log = logger or logging.getLogger(__name__)

    @property
    def settings(self) -> GeneralSettings:
        return self._settings

    def update_settings(self, settings: GeneralSettings) -> bool:
        """Swap settings only when they actually changed. Returns True on change."""
        if general_settings_equal(self._settings, settings):
            return False
        self._log.info("GENERAL_SETTINGS_CHANGED editor_command=%r", settings.editor_command)
        self._settings = settings
        return True

    def command_for(self, file_path: str | Path) -> Optional[EditorCommand]:
        template = (self._settings.editor_command or "").strip()
        if not template:
            return None
        return parse_editor_command(template.replace(FILE_PLACEHOLDER, str(file_path)))

    def open_file(self, file_path: str | Path, *, label: str = "file") -> bool:
        if not file_path or not str(file_path).strip():
            self._log.warning("EDITOR_SKIPPED %s: empty path", label)
            return False

        path = Path(file_path)
        if not path.exists():
            self._log.warning("EDITOR_SKIPPED %s: file does not exist: %s", label, path)
            return False

        if not (self._settings.editor_command or "").strip():
            self._log.warning("EDITOR_SKIPPED %s: editor command is not configured", label)
            return False

        command = self.command_for(path)
        if command is None:
            self._log.warning("EDITOR_COMMAND_MALFORMED %r", self._settings.editor_command)
            return False

        self._log.debug("EDITOR_LAUNCH %s", command.as_text())
        if self._launcher.try_start_process(command.executable, command.arguments):
            self._log.info("EDITOR_STARTED %s executable=%s", label, command.executable)
            return True

        self._log.warning("EDITOR_START_FAILED %s executable=%s", label, command.executable)
        return False
