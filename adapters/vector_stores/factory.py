"""Vector store factory — wire a configured store from a loaded config."""

from __future__ import annotations

from adapters.vector_stores.chroma import ChromaVectorStore
from adapters.vector_stores.client import create_chroma_client
from contracts.config import VectorStoreConfig


def create_vector_store(config: VectorStoreConfig) -> ChromaVectorStore:
    """Create a ``ChromaVectorStore`` for the configured collection."""
    client = create_chroma_client(config.client)
    return ChromaVectorStore(
        config.collection_name,
        client=client,
        distance_space=config.distance_space,
    )
