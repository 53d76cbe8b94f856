"""Vector store configuration schema — Pydantic models.

Mirrors the structure of the YAML file read by
``adapters.config_loader.load_config``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


# ── Chroma client ────────────────────────────────────────────────────


class ClientMode(str, Enum):
    PERSISTENT = "persistent"
    HTTP = "http"
    EPHEMERAL = "ephemeral"


class ChromaClientSettings(BaseModel):
    mode: ClientMode = ClientMode.PERSISTENT
    path: str = "./chroma"         # persistent mode only
    host: str = "localhost"        # http mode only
    port: int = 8000
    ssl: bool = False
    headers: dict[str, str] = {}


class DistanceSpace(str, Enum):
    """HNSW distance function a new collection is created with."""

    COSINE = "cosine"
    L2 = "l2"
    IP = "ip"


# ── Logging ──────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    level: str = "INFO"


# ── Root config ──────────────────────────────────────────────────────


class VectorStoreConfig(BaseModel):
    collection_name: str
    distance_space: DistanceSpace = DistanceSpace.COSINE  # similarity = 1 - distance
    client: ChromaClientSettings = ChromaClientSettings()
    logging: LoggingConfig = LoggingConfig()
