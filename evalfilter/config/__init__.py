"""Configuration schemas and defaults for evalfilter."""

from evalfilter.config.defaults import LOG_DATE_FORMAT, LOG_FORMAT, VALUE_SEPARATOR
from evalfilter.config.schemas import CatalogConfig, CatalogConfigError, LoggingConfig

__all__ = [
    "CatalogConfig",
    "CatalogConfigError",
    "LoggingConfig",
    "LOG_DATE_FORMAT",
    "LOG_FORMAT",
    "VALUE_SEPARATOR",
]
