"""Metadata flattening for vector store records.

Backends such as Chroma only accept flat ``key -> scalar`` metadata, so
nodes are serialised into one flat dict before insert.
"""

from __future__ import annotations

import json
from typing import Any

from contracts.node import BaseNode

DEFAULT_TEXT_KEY = "text"

_SCALAR_TYPES = (str, int, float, bool, type(None))


def validate_is_flat_dict(metadata: dict[str, Any]) -> None:
    """Raise ``ValueError`` unless every key is a string and every value a scalar."""
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise ValueError(f"Metadata key must be str, got {type(key).__name__}")
        if not isinstance(value, _SCALAR_TYPES):
            raise ValueError(
                f"Value for metadata key '{key}' must be one of "
                f"(str, int, float, bool, None), got {type(value).__name__}"
            )


def node_to_metadata(
    node: BaseNode,
    remove_text: bool = False,
    text_field: str = DEFAULT_TEXT_KEY,
    flat_metadata: bool = True,
) -> dict[str, Any]:
    """Flatten a node into a metadata dict suitable for a vector record.

    The node's own metadata is copied as-is. The rest of the node (minus
    metadata and embedding) is serialised to JSON under ``_node_content``
    with its text stored under ``text_field``; ``remove_text`` blanks that
    text for backends that keep it as the record's document already.
    """
    metadata = dict(node.metadata)
    if flat_metadata:
        validate_is_flat_dict(metadata)

    content = node.model_dump(exclude={"metadata", "embedding"})
    text = content.pop("text", "")
    content[text_field] = "" if remove_text else text

    ref_doc_id = node.ref_doc_id or "None"
    metadata["_node_content"] = json.dumps(content)
    metadata["_node_type"] = node.class_name()
    metadata["document_id"] = ref_doc_id
    metadata["doc_id"] = ref_doc_id
    metadata["ref_doc_id"] = ref_doc_id
    return metadata
