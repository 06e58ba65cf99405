# bridge/model/loader.py
from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from .config import (
    ApplicationConfig,
    GeneralSettings,
    PCClientConfig,
    PhoneClientConfig,
    TransformationEngineConfig,
)

T = TypeVar("T")


class ConfigLoader:
    """
    Loads the application configuration YAML into frozen value objects.

    Layout (every section optional, missing fields take dataclass defaults):

        general_settings:
          editor_command: 'code "%f"'
          shortcuts: {toggle_help: F1}
        phone_client:
          device_address: 192.168.1.20
          local_port: 28964
        pc_client:
          host: localhost
          port: 8001
        transformation_engine:
          config_path: Configs/vts_transforms.json

    Read-only: nothing is ever written back.
    """

    SECTIONS: Dict[str, type] = {
        "general_settings": GeneralSettings,
        "phone_client": PhoneClientConfig,
        "pc_client": PCClientConfig,
        "transformation_engine": TransformationEngineConfig,
    }

    def __init__(self, path: str | Path):
        self.path = Path(path)

    # ---------------------------------------------------------------------
    # YAML utility
    # ---------------------------------------------------------------------
    def _load_yaml(self) -> dict:
        if not self.path.exists():
            raise FileNotFoundError(f"Missing config file: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{self.path.name} root must be a mapping")
        return data

    # ---------------------------------------------------------------------
    # Public entry point
    # ---------------------------------------------------------------------
    def load(self) -> ApplicationConfig:
        data = self._load_yaml()

        unknown = sorted(set(data) - set(self.SECTIONS))
        if unknown:
            raise ValueError(f"Unknown config section(s): {', '.join(map(str, unknown))}")

        return ApplicationConfig(
            general_settings=self._load_general_settings(data.get("general_settings")),
            phone_client=self._build("phone_client", data.get("phone_client"), PhoneClientConfig),
            pc_client=self._build("pc_client", data.get("pc_client"), PCClientConfig),
            transformation_engine=self._build(
                "transformation_engine",
                data.get("transformation_engine"),
                TransformationEngineConfig,
            ),
            source_path=str(self.path),
        )

    # ---------------------------------------------------------------------
    # Sections
    # ---------------------------------------------------------------------
    def _load_general_settings(self, raw: Any) -> Optional[GeneralSettings]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise ValueError("Section 'general_settings' must be a mapping")

        raw = dict(raw)
        if "shortcuts" in raw and raw["shortcuts"] is not None:
            shortcuts = raw["shortcuts"]
            if not isinstance(shortcuts, dict):
                raise ValueError("general_settings.shortcuts must be a mapping")
            raw["shortcuts"] = MappingProxyType({str(k): str(v) for k, v in shortcuts.items()})

        return self._build("general_settings", raw, GeneralSettings)

    def _build(self, section: str, raw: Any, cls: Type[T]) -> Optional[T]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise ValueError(f"Section '{section}' must be a mapping")

        declared = {f.name: f for f in fields(cls)}  # type: ignore[arg-type]
        for key in raw:
            if key not in declared:
                raise ValueError(
                    f"Unknown field '{key}' in section '{section}' "
                    f"(valid: {sorted(declared)})"
                )

        kwargs: Dict[str, Any] = {}
        for name, value in raw.items():
            kwargs[name] = self._cast(section, name, value, declared[name].type)
        return cls(**kwargs)

    @staticmethod
    def _cast(section: str, name: str, value: Any, type_name: Any) -> Any:
        # annotations are strings under `from __future__ import annotations`
        t = str(type_name)
        where = f"{section}.{name}"

        if t == "int":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{where}: expected int, got {type(value).__name__}")
            return value

        if t == "float":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{where}: expected number, got {type(value).__name__}")
            return float(value)

        if t == "bool":
            if not isinstance(value, bool):
                raise ValueError(f"{where}: expected bool, got {type(value).__name__}")
            return value

        if t == "str":
            if value is None:
                raise ValueError(f"{where}: expected str, got null")
            return str(value)

        return value
