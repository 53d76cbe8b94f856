"""Node contracts.

Canonical units of indexed content handed to and returned from vector
stores: an id, text, an optional embedding, and flat metadata.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MetadataMode(str, Enum):
    """Controls which metadata keys are rendered into node content."""

    ALL = "all"
    EMBED = "embed"
    LLM = "llm"
    NONE = "none"


# ── Nodes ────────────────────────────────────────────────────────────


class BaseNode(BaseModel):
    """Base node: identity, embedding and metadata."""

    id_: str = Field(default_factory=lambda: str(uuid.uuid4()))
    embedding: list[float] | None = None
    metadata: dict[str, Any] = {}
    excluded_embed_metadata_keys: list[str] = []
    excluded_llm_metadata_keys: list[str] = []
    ref_doc_id: str | None = None

    @classmethod
    def class_name(cls) -> str:
        return cls.__name__

    def get_embedding(self) -> list[float] | None:
        # Missing embeddings are left for the backend to reject.
        return self.embedding

    def get_content(self, metadata_mode: MetadataMode = MetadataMode.NONE) -> str:
        return ""

    def get_metadata_str(self, metadata_mode: MetadataMode = MetadataMode.ALL) -> str:
        return ""


class TextNode(BaseNode):
    """A node carrying a chunk of text."""

    text: str = ""
    text_template: str = "{metadata_str}\n\n{content}"
    metadata_template: str = "{key}: {value}"
    metadata_separator: str = "\n"

    def get_content(self, metadata_mode: MetadataMode = MetadataMode.NONE) -> str:
        """Render the text, prefixed with metadata unless mode is NONE."""
        metadata_str = self.get_metadata_str(metadata_mode).strip()
        if not metadata_str:
            return self.text
        return self.text_template.format(
            metadata_str=metadata_str, content=self.text
        ).strip()

    def get_metadata_str(self, metadata_mode: MetadataMode = MetadataMode.ALL) -> str:
        if metadata_mode == MetadataMode.NONE:
            return ""

        excluded: set[str] = set()
        if metadata_mode == MetadataMode.LLM:
            excluded = set(self.excluded_llm_metadata_keys)
        elif metadata_mode == MetadataMode.EMBED:
            excluded = set(self.excluded_embed_metadata_keys)

        return self.metadata_separator.join(
            self.metadata_template.format(key=key, value=str(value))
            for key, value in self.metadata.items()
            if key not in excluded
        )


class Document(TextNode):
    """A top-level document; also the type rebuilt from query results."""
