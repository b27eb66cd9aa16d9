"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DEFAULT_REGISTRY_FILENAME,
    Configuration,
    ImportSettings,
    LoggingSettings,
    RegistrySettings,
    WorkbookSettings,
)

__all__ = [
    "Configuration",
    "ImportSettings",
    "LoggingSettings",
    "RegistrySettings",
    "WorkbookSettings",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_REGISTRY_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
