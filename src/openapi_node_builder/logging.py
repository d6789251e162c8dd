"""Logging setup and structured-context helpers."""

import logging
from typing import Any


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def format_context(context: dict[str, Any]) -> str:
    """Flatten a (possibly nested) context dict into `a.b=value` pairs."""
    return " ".join(f"{key}={value}" for key, value in _flatten(context))


def _flatten(context: dict[str, Any], prefix: str = ""):
    for key, value in context.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            yield from _flatten(value, f"{name}.")
        else:
            yield name, value
