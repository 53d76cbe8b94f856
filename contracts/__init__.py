"""Shared contracts — source of truth for node and vector store interfaces."""

from contracts.config import (
    ChromaClientSettings,
    ClientMode,
    DistanceSpace,
    LoggingConfig,
    VectorStoreConfig,
)
from contracts.node import BaseNode, Document, MetadataMode, TextNode
from contracts.vector_store import (
    MetadataFilter,
    MetadataFilters,
    VectorStore,
    VectorStoreQuery,
    VectorStoreQueryMode,
    VectorStoreQueryResult,
)

__all__ = [
    # config
    "ChromaClientSettings",
    "ClientMode",
    "DistanceSpace",
    "LoggingConfig",
    "VectorStoreConfig",
    # node
    "BaseNode",
    "Document",
    "MetadataMode",
    "TextNode",
    # vector store
    "MetadataFilter",
    "MetadataFilters",
    "VectorStore",
    "VectorStoreQuery",
    "VectorStoreQueryMode",
    "VectorStoreQueryResult",
]
