"""Vector store contracts.

Defines the abstract interface for vector database backends and the
shared query/result shapes exchanged with them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, model_validator

from contracts.node import BaseNode


# ── Query models ─────────────────────────────────────────────────────


class VectorStoreQueryMode(str, Enum):
    DEFAULT = "default"
    SPARSE = "sparse"
    HYBRID = "hybrid"
    SVM = "svm"
    LOGISTIC_REGRESSION = "logistic_regression"
    LINEAR_REGRESSION = "linear_regression"
    MMR = "mmr"


class MetadataFilter(BaseModel):
    """A single ``key == value`` constraint."""

    key: str
    value: str | int | float | bool


class MetadataFilters(BaseModel):
    """Ordered list of equality constraints, combined with AND."""

    filters: list[MetadataFilter] = []


class VectorStoreQuery(BaseModel):
    """A similarity search request."""

    query_embedding: list[float] | None = None
    similarity_top_k: int = 2
    doc_ids: list[str] | None = None
    query_str: str | None = None
    mode: VectorStoreQueryMode = VectorStoreQueryMode.DEFAULT
    filters: MetadataFilters | None = None


class VectorStoreQueryResult(BaseModel):
    """Index-aligned nodes, similarity scores and ids."""

    nodes: list[BaseNode] = []
    similarities: list[float] = []
    ids: list[str] = []

    @model_validator(mode="after")
    def _check_aligned(self) -> VectorStoreQueryResult:
        lengths = {len(self.nodes), len(self.similarities), len(self.ids)}
        if len(lengths) != 1:
            raise ValueError(
                "nodes, similarities and ids must have the same length "
                f"(got {len(self.nodes)}, {len(self.similarities)}, {len(self.ids)})"
            )
        return self


# ── Abstract store ───────────────────────────────────────────────────


class VectorStore(ABC):
    """Abstract base class for vector database backends."""

    stores_text: bool = False
    flat_metadata: bool = True

    @abstractmethod
    def client(self) -> Any:
        """Return the underlying backend client."""
        ...

    @abstractmethod
    async def add(self, nodes: Sequence[BaseNode] | None) -> list[str]:
        """Add nodes with embeddings. Returns their ids in input order."""
        ...

    @abstractmethod
    async def delete(self, ref_doc_id: str, **delete_options: Any) -> None:
        """Delete the record stored under ``ref_doc_id``."""
        ...

    @abstractmethod
    async def query(
        self, query: VectorStoreQuery, **query_options: Any
    ) -> VectorStoreQueryResult:
        """Run a similarity query."""
        ...
