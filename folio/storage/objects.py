"""Object storage listing for the gallery (Supabase Storage REST API)."""

import logging
import re

import httpx

from folio.errors import StorageFailure
from folio.tenancy.cache import StoreConfig

logger = logging.getLogger(__name__)

IMAGE_NAME_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


class ObjectLister:
    """Lists the files stored under a prefix of one bucket."""

    def __init__(
        self,
        config: StoreConfig,
        bucket: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._bucket = bucket
        self._timeout = timeout
        self._transport = transport

    def public_url(self, path: str) -> str:
        base = self._config.url.rstrip("/")
        return f"{base}/storage/v1/object/public/{self._bucket}/{path}"

    async def list_files(self, prefix: str, limit: int = 1000) -> list[dict]:
        """Raw file descriptors under ``prefix``, newest first."""
        base = self._config.url.rstrip("/")
        headers = {
            "apikey": self._config.anon_key,
            "Authorization": f"Bearer {self._config.anon_key}",
        }
        body = {
            "prefix": prefix,
            "limit": limit,
            "offset": 0,
            "sortBy": {"column": "created_at", "order": "desc"},
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{base}/storage/v1/object/list/{self._bucket}", json=body, headers=headers
                )
                response.raise_for_status()
            files = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise StorageFailure(f"listing {self._bucket}/{prefix} failed: {exc}") from exc
        if files is None:
            return []
        if not isinstance(files, list) or not all(isinstance(item, dict) for item in files):
            raise StorageFailure(f"listing {self._bucket}/{prefix} returned {type(files).__name__}")
        return files

    async def list_images(self, prefix: str) -> list[dict]:
        """Image files under ``prefix`` with their public URL attached."""
        images = []
        for item in await self.list_files(prefix):
            name = item.get("name") or ""
            if name.startswith(".") or not IMAGE_NAME_RE.search(name):
                continue
            full_path = f"{prefix}/{name}"
            images.append(
                {
                    **item,
                    "fullPath": full_path,
                    "url": self.public_url(full_path),
                    "id": item.get("id") or full_path,
                }
            )
        return images
