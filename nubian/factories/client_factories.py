"""Factory functions for external API clients."""

from functools import lru_cache

from nubian.config import get_settings
from nubian.clients.content_store_client import ContentStoreClient


@lru_cache(maxsize=1)
def get_content_store_client() -> ContentStoreClient:
    """
    Create singleton content store client.

    Returns:
        ContentStoreClient instance
    """
    settings = get_settings()
    return ContentStoreClient(
        jwt=settings.pinata_jwt,
        gateway=settings.pinata_gateway,
        upload_url=settings.pinata_upload_url,
        api_url=settings.pinata_api_url,
        timeout=settings.content_store_timeout_seconds,
    )
