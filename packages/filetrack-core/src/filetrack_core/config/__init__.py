from .loader import CONFIG_ENV_VAR, DEFAULT_CONFIG_TEMPLATE, load_config
from .models import FileTrackConfig, TrackerConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_TEMPLATE",
    "FileTrackConfig",
    "TrackerConfig",
    "load_config",
]
