"""Editor settings for TileWeaver.

Settings come from an optional YAML file, then command-line overrides:

    # tileweaver.yaml
    resources_dir: resources
    document_name: terrain
    debounce_seconds: 0.5
    output_width: 32
    output_height: 16
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from tileweaver.storage import DOCUMENT_SUFFIX

CONFIG_ENV_VAR = "TILEWEAVER_CONFIG"
DEFAULT_CONFIG_FILE = Path("tileweaver.yaml")

# Bundled sample document, copied into place by `tileweaver --init`
SAMPLE_DOCUMENT = Path(__file__).parent / "resources" / "terrain.xml"


class EditorSettings(BaseModel):
    """Settings for one editing session."""

    model_config = ConfigDict(frozen=True)

    resources_dir: Path = Path("resources")
    document_name: str = Field(default="terrain", min_length=1)
    data_dir: Path = Path("data")

    debounce_seconds: float = Field(default=0.5, ge=0)
    weight_min: int = Field(default=0, ge=0)
    weight_max: int = Field(default=20, ge=0)
    flush_before_regenerate: bool = True

    output_width: int = Field(default=32, gt=0)
    output_height: int = Field(default=16, gt=0)
    seed: int | None = None
    max_retries: int = Field(default=10, gt=0)

    @model_validator(mode="after")
    def _check_weight_range(self) -> EditorSettings:
        if self.weight_min > self.weight_max:
            raise ValueError(
                f"weight_min ({self.weight_min}) must not exceed weight_max ({self.weight_max})"
            )
        return self

    @property
    def document_path(self) -> Path:
        return self.resources_dir / f"{self.document_name}{DOCUMENT_SUFFIX}"

    def with_overrides(self, **overrides: Any) -> EditorSettings:
        """Return a copy with non-None overrides applied (and validated)."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return EditorSettings.model_validate({**self.model_dump(), **updates})


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the settings file: explicit path, then $TILEWEAVER_CONFIG, then ./tileweaver.yaml."""
    if explicit is not None:
        return explicit
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def load_settings(path: Path | None = None) -> EditorSettings:
    """Load settings from a YAML file.

    A missing file yields defaults.

    Raises:
        pydantic.ValidationError: If the file contains invalid settings
        yaml.YAMLError: If the file is not valid YAML
    """
    if path is None or not path.exists():
        return EditorSettings()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return EditorSettings.model_validate(data or {})
