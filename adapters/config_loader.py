"""Config loader — parse and validate the vector store YAML config."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from contracts.config import LoggingConfig, VectorStoreConfig


def load_config(path: str) -> VectorStoreConfig:
    """Load a YAML config file and return a validated VectorStoreConfig."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = p.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

    return VectorStoreConfig(**data)


def configure_logging(config: LoggingConfig) -> None:
    """Apply the configured level to the ``adapters`` logger hierarchy."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")
    logging.getLogger("adapters").setLevel(level)
