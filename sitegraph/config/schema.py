"""Pydantic schemas for site configuration."""

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class DataSourceConfig(BaseModel):
    """One mounted data source."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Registered data source type name")
    items_root: str = Field("/", description="Prefix applied to every item identifier")
    layouts_root: str = Field("/", description="Prefix applied to every layout identifier")
    config: dict[str, Any] | None = Field(None, description="Data source specific configuration")


class PruneConfig(BaseModel):
    """Output pruning settings."""

    model_config = ConfigDict(extra="allow")

    auto_prune: bool = False
    exclude: list[str] = Field(default_factory=list)


class SiteConfig(BaseModel):
    """Complete site configuration, after defaults are applied."""

    model_config = ConfigDict(extra="allow")

    text_extensions: list[str]
    lib_dirs: list[str]
    commands_dirs: list[str]
    output_dir: str
    data_sources: list[DataSourceConfig]
    index_filenames: list[str]
    enable_output_diff: bool
    prune: PruneConfig
