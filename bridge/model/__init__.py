from .config import (
    ApplicationConfig,
    GeneralSettings,
    PCClientConfig,
    PhoneClientConfig,
    TransformationEngineConfig,
)
from .loader import ConfigLoader

__all__ = ["ApplicationConfig",
           "GeneralSettings",
           "PCClientConfig",
           "PhoneClientConfig",
           "TransformationEngineConfig",
           "ConfigLoader"]
