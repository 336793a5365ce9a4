"""External API clients."""

from nubian.clients.content_store_client import ContentStoreClient, StoredFile

__all__ = ["ContentStoreClient", "StoredFile"]
