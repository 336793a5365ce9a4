"""Pinata (IPFS) content store client for paper PDFs."""

from dataclasses import dataclass
from typing import Optional

import httpx

from nubian.exceptions import ContentStoreError
from nubian.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """A file held by the content store."""

    id: str
    cid: str


class ContentStoreClient:
    """Client for the Pinata v3 files API.

    Uploads are public so the gateway can serve them by content identifier.
    No call is retried; failures surface as ``ContentStoreError``.
    """

    def __init__(
        self,
        jwt: str,
        gateway: str,
        upload_url: str = "https://uploads.pinata.cloud/v3/files",
        api_url: str = "https://api.pinata.cloud/v3/files/public",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.jwt = jwt
        self.gateway = gateway
        self.upload_url = upload_url
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self.jwt}"},
            transport=self._transport,
        )

    @staticmethod
    def _data(response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError as e:
            raise ContentStoreError(
                message="Content store returned an unexpected response",
                details={"status_code": response.status_code},
            ) from e
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ContentStoreError(
                message="Content store returned an unexpected response",
                details={"status_code": response.status_code},
            )
        return data

    @staticmethod
    def _stored_file(entry: dict, default_cid: Optional[str] = None) -> StoredFile:
        try:
            cid = entry.get("cid", default_cid) if default_cid else entry["cid"]
            return StoredFile(id=str(entry["id"]), cid=str(cid))
        except (AttributeError, KeyError, TypeError) as e:
            raise ContentStoreError(
                message="Content store returned an unexpected response",
                details={"error_type": type(e).__name__},
            ) from e

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def gateway_url(self, cid: str) -> str:
        """Public URL for a content identifier."""
        return f"https://{self.gateway}/ipfs/{cid}"

    async def upload(self, filename: str, content: bytes, content_type: str = "application/pdf") -> StoredFile:
        """
        Upload a file publicly.

        Args:
            filename: Name recorded with the upload
            content: Raw file bytes
            content_type: MIME type of the file

        Returns:
            StoredFile with the store's file id and content identifier

        Raises:
            ContentStoreError: If the upload fails
        """
        log.info("content upload started", filename=filename, size=len(content))
        try:
            async with self._client() as client:
                response = await client.post(
                    self.upload_url,
                    files={"file": (filename, content, content_type)},
                    data={"network": "public"},
                )
                response.raise_for_status()
                data = self._data(response)
        except httpx.HTTPError as e:
            log.error("content upload failed", filename=filename, error=str(e))
            raise ContentStoreError(
                message="Failed to upload file",
                details={"filename": filename, "error_type": type(e).__name__},
            ) from e

        stored = self._stored_file(data)
        log.info("content upload completed", filename=filename, cid=stored.cid)
        return stored

    async def get_by_cid(self, cid: str) -> Optional[StoredFile]:
        """
        File stored under a content identifier, or None if the store has none.

        Raises:
            ContentStoreError: If the lookup fails
        """
        try:
            async with self._client() as client:
                response = await client.get(self.api_url, params={"cid": cid})
                response.raise_for_status()
                data = self._data(response)
        except httpx.HTTPError as e:
            log.error("content lookup failed", cid=cid, error=str(e))
            raise ContentStoreError(
                message="Failed to look up stored file",
                details={"cid": cid, "error_type": type(e).__name__},
            ) from e

        files = data.get("files") or []
        if not isinstance(files, list):
            raise ContentStoreError(
                message="Content store returned an unexpected response",
                details={"cid": cid},
            )
        if not files:
            return None
        return self._stored_file(files[0], default_cid=cid)

    async def delete(self, file_ids: list[str]) -> None:
        """
        Delete files by store id.

        Raises:
            ContentStoreError: If any delete fails
        """
        try:
            async with self._client() as client:
                for file_id in file_ids:
                    response = await client.delete(f"{self.api_url}/{file_id}")
                    response.raise_for_status()
                    log.debug("content deleted", file_id=file_id)
        except httpx.HTTPError as e:
            log.error("content delete failed", file_ids=file_ids, error=str(e))
            raise ContentStoreError(
                message="Failed to delete stored file",
                details={"file_ids": file_ids, "error_type": type(e).__name__},
            ) from e

    async def delete_by_cid(self, cid: str) -> bool:
        """
        Delete the file stored under a content identifier.

        Returns:
            True if a file was found and deleted
        """
        stored = await self.get_by_cid(cid)
        if stored is None:
            log.info("content not found for delete", cid=cid)
            return False
        await self.delete([stored.id])
        log.info("content deleted by cid", cid=cid, file_id=stored.id)
        return True
