"""Unit tests for chromadb client construction and store wiring."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from adapters.vector_stores.chroma import ChromaVectorStore
from adapters.vector_stores.client import create_chroma_client
from adapters.vector_stores.factory import create_vector_store
from contracts.config import ChromaClientSettings, ClientMode, DistanceSpace, VectorStoreConfig


class TestCreateChromaClient:
    def test_persistent(self) -> None:
        with patch("adapters.vector_stores.client.chromadb") as mock_chromadb:
            client = create_chroma_client(ChromaClientSettings(path="/tmp/db"))
        mock_chromadb.PersistentClient.assert_called_once_with(path="/tmp/db")
        assert client is mock_chromadb.PersistentClient.return_value

    def test_http(self) -> None:
        settings = ChromaClientSettings(
            mode=ClientMode.HTTP, host="db", port=9000, ssl=True, headers={"X-Key": "k"}
        )
        with patch("adapters.vector_stores.client.chromadb") as mock_chromadb:
            create_chroma_client(settings)
        mock_chromadb.HttpClient.assert_called_once_with(
            host="db", port=9000, ssl=True, headers={"X-Key": "k"}
        )

    def test_http_without_headers(self) -> None:
        settings = ChromaClientSettings(mode=ClientMode.HTTP)
        with patch("adapters.vector_stores.client.chromadb") as mock_chromadb:
            create_chroma_client(settings)
        _, kwargs = mock_chromadb.HttpClient.call_args
        assert kwargs["headers"] is None

    def test_ephemeral(self) -> None:
        with patch("adapters.vector_stores.client.chromadb") as mock_chromadb:
            create_chroma_client(ChromaClientSettings(mode=ClientMode.EPHEMERAL))
        mock_chromadb.EphemeralClient.assert_called_once_with()


class TestCreateVectorStore:
    def test_wires_collection_and_client(self) -> None:
        config = VectorStoreConfig(
            collection_name="docs",
            client=ChromaClientSettings(mode=ClientMode.EPHEMERAL),
        )
        fake_client = MagicMock()
        with patch(
            "adapters.vector_stores.factory.create_chroma_client",
            return_value=fake_client,
        ) as create:
            store = create_vector_store(config)

        create.assert_called_once_with(config.client)
        assert isinstance(store, ChromaVectorStore)
        assert store.collection_name == "docs"
        assert store.client() is fake_client
        fake_client.get_or_create_collection.assert_not_called()

    def test_store_builds_client_from_settings(self) -> None:
        settings = ChromaClientSettings(mode=ClientMode.EPHEMERAL)
        with patch("adapters.vector_stores.chroma.create_chroma_client") as create:
            store = ChromaVectorStore("docs", settings=settings)
        create.assert_called_once_with(settings)
        assert store.client() is create.return_value

    def test_passes_distance_space(self) -> None:
        config = VectorStoreConfig(collection_name="docs", distance_space=DistanceSpace.IP)
        with patch("adapters.vector_stores.factory.create_chroma_client"):
            store = create_vector_store(config)
        assert store._collections.distance_space == DistanceSpace.IP
