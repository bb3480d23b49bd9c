# storefront/services/asset_client.py
import time

import requests
from requests import RequestException

from storefront.domain.errors import UpstreamAssetError
from storefront.utils.settings import (
    ASSET_BASE_URL,
    ASSET_BUCKET,
    ASSET_PREFIX,
    ASSET_SERVICE_KEY,
    ASSET_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AssetClient:
    """
    Product images in object storage (supabase-storage style REST API).
    Upload returns the public URL that is stored on the product row.
    """

    def __init__(
        self,
        base_url: str | None = None,
        bucket: str | None = None,
        prefix: str | None = None,
        service_key: str | None = None,
        timeout: int = ASSET_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or ASSET_BASE_URL).rstrip("/")
        self.bucket = bucket or ASSET_BUCKET
        self.prefix = (prefix or ASSET_PREFIX).strip("/")
        self.service_key = service_key if service_key is not None else ASSET_SERVICE_KEY
        self.timeout = timeout

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.service_key}", "apikey": self.service_key}

    def object_key(self, filename: str) -> str:
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        return f"{self.prefix}/{int(time.time() * 1000)}.{ext}"

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{key}"

    def key_from_url(self, url: str) -> str | None:
        name = url.rstrip("/").rsplit("/", 1)[-1]
        return f"{self.prefix}/{name}" if name else None

    def upload(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        key = self.object_key(filename)
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{key}"
        logger.info(f"AssetClient POST {url}")

        headers = {
            **self._headers(),
            "Content-Type": content_type or "application/octet-stream",
            "cache-control": "3600",
            "x-upsert": "false",
        }
        try:
            resp = requests.post(url, data=content, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as e:
            raise UpstreamAssetError(f"Image upload failed: {e}") from e

        return self.public_url(key)

    def delete(self, public_url: str) -> None:
        key = self.key_from_url(public_url)
        if not key:
            return

        url = f"{self.base_url}/storage/v1/object/{self.bucket}"
        logger.info(f"AssetClient DELETE {url} {key}")
        try:
            resp = requests.delete(
                url,
                json={"prefixes": [key]},
                headers=self._headers(),
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except RequestException as e:
            raise UpstreamAssetError(f"Image delete failed: {e}") from e
