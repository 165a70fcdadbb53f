from .loader import ConfigError, load_config, load_yaml_config
from .models import AppConfig, FilterDecl, LoggingConfig, OutputConfig, PipelineConfig

__all__ = [
    "AppConfig",
    "ConfigError",
    "FilterDecl",
    "LoggingConfig",
    "OutputConfig",
    "PipelineConfig",
    "load_config",
    "load_yaml_config",
]
