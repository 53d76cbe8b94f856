"""ChromaDB vector store adapter.

Translates node inserts, deletes and similarity queries into calls on a
single Chroma collection. chromadb's client is synchronous, so every
backend call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

import chromadb
from chromadb.api import ClientAPI

from adapters.metadata import DEFAULT_TEXT_KEY, node_to_metadata
from adapters.vector_stores.client import create_chroma_client
from contracts.config import ChromaClientSettings, DistanceSpace
from contracts.node import BaseNode, Document, MetadataMode
from contracts.vector_store import (
    MetadataFilters,
    VectorStore,
    VectorStoreQuery,
    VectorStoreQueryMode,
    VectorStoreQueryResult,
)

logger = logging.getLogger(__name__)

# Chroma leaves embeddings out of query results unless asked for.
QUERY_INCLUDE = ["distances", "metadatas", "documents", "embeddings"]


class CollectionManager:
    """Lazily creates and caches the handle for one named collection.

    Two states: UNBOUND (no handle) and BOUND. ``acquire()`` binds,
    ``invalidate()`` unbinds. There is no locking; two overlapping
    ``acquire()`` calls may both create, which relies on
    ``get_or_create_collection`` being idempotent.
    """

    def __init__(
        self,
        client: ClientAPI,
        name: str,
        distance_space: DistanceSpace = DistanceSpace.COSINE,
    ) -> None:
        self._client = client
        self._name = name
        self._distance_space = distance_space
        self._collection: chromadb.Collection | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def distance_space(self) -> DistanceSpace:
        return self._distance_space

    @property
    def bound(self) -> bool:
        return self._collection is not None

    async def acquire(self) -> chromadb.Collection:
        if self._collection is None:
            logger.debug(
                "Creating collection %r (%s space)", self._name, self._distance_space.value
            )
            # Only applies on first creation; an existing collection keeps its space.
            self._collection = await asyncio.to_thread(
                self._client.get_or_create_collection,
                name=self._name,
                metadata={"hnsw:space": self._distance_space.value},
            )
        return self._collection

    def invalidate(self) -> None:
        self._collection = None


def filters_to_where(filters: MetadataFilters | None) -> dict[str, Any] | None:
    """Fold equality filters into a Chroma ``where`` map.

    Later filters overwrite earlier ones with the same key. Returns
    ``None`` rather than ``{}`` when there is nothing to filter on.
    """
    if filters is None:
        return None
    where: dict[str, Any] = {}
    for f in filters.filters:
        where[f.key] = f.value
    return where or None


def to_chroma_where(where: dict[str, Any] | None) -> dict[str, Any] | None:
    """Express an equality map in Chroma's one-operator-per-dict form."""
    if not where or len(where) == 1:
        return where or None
    return {"$and": [{key: value} for key, value in where.items()]}


def _first(result: Any, key: str) -> Any:
    """Return the rows for the first (only) query in a Chroma result."""
    batches = result.get(key)
    if batches is None:
        return None
    return batches[0]


def _to_floats(embedding: Any) -> list[float] | None:
    if embedding is None:
        return None
    return [float(x) for x in embedding]


class ChromaVectorStore(VectorStore):
    """Vector store backed by a single ChromaDB collection.

    Similarity is reported as ``1 - distance``. That is only a meaningful
    score for a normalised distance, so collections are created in the
    cosine space by default. With ``l2`` or ``ip`` (or a pre-existing
    collection in another space) the scores are not renormalised.
    """

    DEFAULT_TEXT_KEY = DEFAULT_TEXT_KEY
    stores_text = True
    flat_metadata = True

    def __init__(
        self,
        collection_name: str,
        client: ClientAPI | None = None,
        settings: ChromaClientSettings | None = None,
        distance_space: DistanceSpace = DistanceSpace.COSINE,
    ) -> None:
        if client is None:
            client = create_chroma_client(settings or ChromaClientSettings())
        self._client = client
        self._collections = CollectionManager(client, collection_name, distance_space)

    @property
    def collection_name(self) -> str:
        return self._collections.name

    def client(self) -> ClientAPI:
        return self._client

    async def get_collection(self) -> chromadb.Collection:
        return await self._collections.acquire()

    def clear_collection(self) -> None:
        self._collections.invalidate()

    # ── add ───────────────────────────────────────────────────────────

    def _data_to_insert(self, nodes: Sequence[BaseNode]) -> dict[str, list[Any]]:
        return {
            "embeddings": [node.get_embedding() for node in nodes],
            "ids": [node.id_ for node in nodes],
            "metadatas": [
                node_to_metadata(
                    node,
                    remove_text=True,
                    text_field=self.DEFAULT_TEXT_KEY,
                    flat_metadata=self.flat_metadata,
                )
                for node in nodes
            ],
            "documents": [node.get_content(MetadataMode.NONE) for node in nodes],
        }

    async def add(self, nodes: Sequence[BaseNode] | None) -> list[str]:
        if not nodes:
            return []

        data = self._data_to_insert(nodes)
        try:
            collection = await self.get_collection()
            await asyncio.to_thread(collection.add, **data)
        except Exception as exc:
            logger.error("%s", exc, exc_info=exc)
            raise
        return data["ids"]

    # ── delete ────────────────────────────────────────────────────────

    async def delete(
        self,
        ref_doc_id: str,
        *,
        where: dict[str, Any] | None = None,
        where_document: dict[str, Any] | None = None,
    ) -> None:
        try:
            collection = await self.get_collection()
            await asyncio.to_thread(
                collection.delete,
                ids=[ref_doc_id],
                where=where,
                where_document=where_document,
            )
            # Force a fresh handle on the next operation.
            self.clear_collection()
        except Exception as exc:
            logger.error("%s", exc, exc_info=exc)
            raise

    # ── query ─────────────────────────────────────────────────────────

    async def query(
        self,
        query: VectorStoreQuery,
        *,
        where_document: dict[str, Any] | None = None,
    ) -> VectorStoreQueryResult:
        if query.doc_ids is not None:
            raise ValueError("ChromaDB does not support querying by doc_ids")
        if query.mode != VectorStoreQueryMode.DEFAULT:
            raise ValueError(
                f"ChromaDB does not support query mode '{query.mode.value}'"
            )

        where = to_chroma_where(filters_to_where(query.filters))
        try:
            collection = await self.get_collection()
            result = await asyncio.to_thread(
                collection.query,
                query_embeddings=(
                    [query.query_embedding] if query.query_embedding is not None else None
                ),
                query_texts=[query.query_str] if query.query_str is not None else None,
                n_results=query.similarity_top_k,
                where=where,
                where_document=where_document,
                include=QUERY_INCLUDE,
            )
            return self._to_query_result(result)
        except Exception as exc:
            logger.error("%s", exc, exc_info=exc)
            raise

    def _to_query_result(self, result: Any) -> VectorStoreQueryResult:
        missing = [
            key
            for key in ("ids", "distances", "documents", "embeddings")
            if _first(result, key) is None
        ]
        if missing:
            raise ValueError(
                f"Chroma query returned misaligned result arrays: missing {missing}"
            )

        ids = list(_first(result, "ids"))
        distances = list(_first(result, "distances"))
        documents = list(_first(result, "documents"))
        embeddings = list(_first(result, "embeddings"))
        metadatas = _first(result, "metadatas")
        metadatas = list(metadatas) if metadatas is not None else [None] * len(ids)

        lengths = {
            "ids": len(ids),
            "distances": len(distances),
            "documents": len(documents),
            "embeddings": len(embeddings),
            "metadatas": len(metadatas),
        }
        if len(set(lengths.values())) != 1:
            raise ValueError(f"Chroma query returned misaligned result arrays: {lengths}")

        nodes: list[BaseNode] = [
            Document(
                id_=doc_id,
                text=document or "",
                metadata=metadata or {},
                embedding=_to_floats(embedding),
            )
            for doc_id, document, metadata, embedding in zip(
                ids, documents, metadatas, embeddings
            )
        ]
        return VectorStoreQueryResult(
            nodes=nodes,
            similarities=[1 - float(distance) for distance in distances],
            ids=ids,
        )
