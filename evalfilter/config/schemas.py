"""Pydantic schemas for filter catalog configuration."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from evalfilter.catalog.catalog import FieldCatalog, LogicField
from evalfilter.compiler.schemas import SimpleFilterField


class CatalogConfigError(Exception):
    """Exception raised when a catalog configuration file cannot be loaded."""

    pass


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )


class CatalogConfig(BaseModel):
    """Field catalog and simple filter whitelist for one list view."""

    name: str = Field(default="default", description="Name of the list view")
    fields: list[LogicField] = Field(default_factory=list, description="Logic filter fields")
    filter_fields: list[SimpleFilterField] = Field(
        default_factory=list, description="Simple filter keys and their backend field types"
    )
    disabled_fields: list[str] = Field(
        default_factory=list, description="Field names hidden from the editor"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("fields")
    @classmethod
    def unique_names(cls, v: list[LogicField]) -> list[LogicField]:
        """Ensure field names are unique."""
        names = [f.name for f in v]
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"duplicate field names: {duplicates}")
        return v

    def build_catalog(self) -> FieldCatalog:
        """Create the FieldCatalog for this configuration."""
        return FieldCatalog(self.fields)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CatalogConfig":
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CatalogConfigError(f"Failed to read catalog config {path}: {e}")
        return cls(**(data or {}))

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
