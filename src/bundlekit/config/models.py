"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bundlekit.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ManifestConfig(BaseModel):
    """[manifest] section — where an exploded bundle keeps its manifest."""

    model_config = {"frozen": True}

    meta_inf_dir: str = Field(default="META-INF", min_length=1)
    manifest_name: str = Field(default="MANIFEST.MF", min_length=1)


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
