import requests


class StorageApiClient:
    """Thin client for the Supabase Storage object API."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, content_type: str) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": content_type,
        }

    def object_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/{bucket}/{path}"

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> requests.Response:
        return requests.post(
            self.object_url(bucket, path), headers=self._headers(content_type), data=data, timeout=self.timeout
        )

    def upsert(self, bucket: str, path: str, data: bytes, content_type: str) -> requests.Response:
        return requests.put(
            self.object_url(bucket, path), headers=self._headers(content_type), data=data, timeout=self.timeout
        )
