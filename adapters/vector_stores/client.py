"""Build chromadb clients from ``ChromaClientSettings``."""

from __future__ import annotations

import chromadb
from chromadb.api import ClientAPI

from contracts.config import ChromaClientSettings, ClientMode


def create_chroma_client(settings: ChromaClientSettings) -> ClientAPI:
    """Return a chromadb client for the configured mode."""
    if settings.mode == ClientMode.PERSISTENT:
        return chromadb.PersistentClient(path=settings.path)
    if settings.mode == ClientMode.HTTP:
        return chromadb.HttpClient(
            host=settings.host,
            port=settings.port,
            ssl=settings.ssl,
            headers=settings.headers or None,
        )
    if settings.mode == ClientMode.EPHEMERAL:
        return chromadb.EphemeralClient()
    raise ValueError(f"Unsupported Chroma client mode: {settings.mode}")
