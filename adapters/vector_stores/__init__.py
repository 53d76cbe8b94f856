from adapters.vector_stores.chroma import ChromaVectorStore, CollectionManager
from adapters.vector_stores.client import create_chroma_client
from adapters.vector_stores.factory import create_vector_store

__all__ = [
    "ChromaVectorStore",
    "CollectionManager",
    "create_chroma_client",
    "create_vector_store",
]
