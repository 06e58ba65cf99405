# bridge/common/logging_config.py
from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class LogDefaults:
    console_format: str = "%(levelname)s %(name)s: %(message)s"
    file_format:    str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULTS = LogDefaults()
