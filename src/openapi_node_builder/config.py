"""Builder configuration, read from a YAML file."""

from pathlib import Path

import yaml
from pydantic import BaseModel


class Override(BaseModel):
    """Merge `replace` into every top-level property matching all of `find`."""

    find: dict
    replace: dict


class BuilderConfig(BaseModel):
    endpoint_notice: bool = True  # prefix each operation's fields with `METHOD /path`
    skip_deprecated: bool = True
    overrides: list[Override] = []


def load_config(config_path: Path | None) -> BuilderConfig:
    """Load the builder configuration; a missing path or empty file gives defaults."""
    if config_path is None:
        return BuilderConfig()
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    return BuilderConfig(**data)
