import logging
import re
import time
from pathlib import PurePosixPath
from typing import Optional

import requests

from souq.core.config import settings
from souq.infra.api_client import StorageApiClient

logger = logging.getLogger(__name__)


class StorageNotConfiguredError(RuntimeError):
    pass


def get_storage_client() -> StorageApiClient:
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise StorageNotConfiguredError("SUPABASE_URL and SUPABASE_KEY must be set for uploads")
    return StorageApiClient(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def build_asset_path(folder: str, file_name: str) -> str:
    """Flatten a client file name under a folder, e.g. stores/store_1/logo-my-logo.png."""
    name = PurePosixPath(file_name or "upload").name
    name = re.sub(r"[^A-Za-z0-9._-]", "-", name).strip("-") or "upload"
    return f"{folder.strip('/')}/{name}"


def upload_asset(
    path: str,
    data: bytes,
    content_type: str,
    bucket_name: Optional[str] = None,
    retries: Optional[int] = None,
    retry_delay: float = 2,
    client: Optional[StorageApiClient] = None,
) -> Optional[dict]:
    """Upload bytes to object storage; existing objects are overwritten. Returns path and public URL."""
    bucket_name = bucket_name or settings.SUPABASE_BUCKET
    retries = retries or settings.UPLOAD_RETRIES
    client = client or get_storage_client()

    for attempt in range(retries):
        try:
            logger.info("📤 Uploading asset: %s (%d bytes) - attempt %d/%d", path, len(data), attempt + 1, retries)
            response = client.upload(bucket_name, path, data, content_type)

            if response.status_code in [200, 201]:
                logger.info("✅ Asset upload success: %s", path)
                return {"path": path, "url": client.public_url(bucket_name, path)}
            elif response.status_code == 409:  # File exists, try upsert
                logger.info("⚠️ Asset exists, trying upsert...")
                put_response = client.upsert(bucket_name, path, data, content_type)
                if put_response.status_code == 200:
                    logger.info("✅ Asset upserted successfully: %s", path)
                    return {"path": path, "url": client.public_url(bucket_name, path)}
                logger.error("❌ Upsert failed: %s - %s", put_response.status_code, put_response.text)
            else:
                logger.error("❌ Upload failed: %s - %s", response.status_code, response.text)

        except requests.RequestException as e:
            logger.error("❌ Asset upload failed (attempt %d/%d): %s", attempt + 1, retries, e)

        if attempt < retries - 1:
            logger.info("⏳ Retrying in %s seconds...", retry_delay)
            time.sleep(retry_delay)

    return None
