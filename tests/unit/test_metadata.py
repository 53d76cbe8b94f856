"""Unit tests for node metadata flattening."""

from __future__ import annotations

import json

import pytest

from adapters.metadata import node_to_metadata, validate_is_flat_dict
from contracts.node import Document, TextNode


class TestValidateIsFlatDict:
    def test_scalars_accepted(self) -> None:
        validate_is_flat_dict({"s": "x", "i": 1, "f": 1.5, "b": True, "n": None})

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}, (1,)])
    def test_non_scalars_rejected(self, value) -> None:
        with pytest.raises(ValueError, match="metadata key 'bad'"):
            validate_is_flat_dict({"bad": value})

    def test_non_string_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="key must be str"):
            validate_is_flat_dict({1: "x"})


class TestNodeToMetadata:
    def test_keeps_user_metadata(self) -> None:
        node = TextNode(id_="n1", text="hello", metadata={"author": "kim", "page": 3})
        meta = node_to_metadata(node)
        assert meta["author"] == "kim"
        assert meta["page"] == 3

    def test_does_not_mutate_node(self) -> None:
        node = TextNode(id_="n1", text="hello", metadata={"author": "kim"})
        node_to_metadata(node)
        assert node.metadata == {"author": "kim"}

    def test_node_content_holds_text(self) -> None:
        node = TextNode(id_="n1", text="hello", embedding=[0.1])
        content = json.loads(node_to_metadata(node)["_node_content"])
        assert content["text"] == "hello"
        assert content["id_"] == "n1"
        assert "embedding" not in content
        assert "metadata" not in content

    def test_remove_text_blanks_text_field(self) -> None:
        node = TextNode(id_="n1", text="hello")
        meta = node_to_metadata(node, remove_text=True)
        assert json.loads(meta["_node_content"])["text"] == ""

    def test_custom_text_field(self) -> None:
        node = TextNode(id_="n1", text="hello")
        content = json.loads(node_to_metadata(node, text_field="body")["_node_content"])
        assert content["body"] == "hello"
        assert "text" not in content

    def test_node_type_and_doc_ids(self) -> None:
        node = Document(id_="n1", text="hello", ref_doc_id="src-1")
        meta = node_to_metadata(node)
        assert meta["_node_type"] == "Document"
        assert meta["document_id"] == "src-1"
        assert meta["doc_id"] == "src-1"
        assert meta["ref_doc_id"] == "src-1"

    def test_missing_ref_doc_id(self) -> None:
        meta = node_to_metadata(TextNode(text="hello"))
        assert meta["ref_doc_id"] == "None"

    def test_nested_metadata_rejected(self) -> None:
        node = TextNode(text="hello", metadata={"tags": ["a", "b"]})
        with pytest.raises(ValueError):
            node_to_metadata(node)

    def test_nested_metadata_allowed_when_not_flat(self) -> None:
        node = TextNode(text="hello", metadata={"tags": ["a", "b"]})
        meta = node_to_metadata(node, flat_metadata=False)
        assert meta["tags"] == ["a", "b"]
