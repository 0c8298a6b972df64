"""Cloudinary Admin and Upload API client."""

import hashlib
import time
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

HTTP_NOT_FOUND = 404


class CloudinaryError(RuntimeError):
    """Raised when Cloudinary responds with an error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        """Return true when the upstream resource does not exist."""
        return self.status_code == HTTP_NOT_FOUND


class MediaClient(Protocol):
    """Interface for media-hosting API interactions."""

    async def list_resources(self, prefix: str, max_results: int) -> dict[str, object]:
        """List uploaded image resources under a prefix."""

    async def get_resource(self, public_id: str) -> dict[str, object]:
        """Fetch a single image resource by public id."""

    async def destroy(self, public_id: str) -> dict[str, object]:
        """Delete an image resource and return the raw API result."""


@dataclass
class HttpxCloudinaryClient(MediaClient):
    """HTTPX-backed Cloudinary client."""

    cloud_name: str
    api_key: str
    api_secret: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15.0

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str,
        timeout: float = 15.0,
    ) -> "HttpxCloudinaryClient":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_resources(self, prefix: str, max_results: int) -> dict[str, object]:
        """List uploaded images under a prefix via the Admin API."""
        url = f"{self.base_url}/{self.cloud_name}/resources/image/upload"
        response = await self.http_client.get(
            url,
            params={"prefix": prefix, "max_results": max_results, "context": "true"},
            auth=(self.api_key, self.api_secret),
            timeout=self.timeout,
        )
        return _parse_response(response)

    async def get_resource(self, public_id: str) -> dict[str, object]:
        """Fetch a single uploaded image via the Admin API."""
        url = (
            f"{self.base_url}/{self.cloud_name}/resources/image/upload/"
            f"{_quote_public_id(public_id)}"
        )
        response = await self.http_client.get(
            url,
            auth=(self.api_key, self.api_secret),
            timeout=self.timeout,
        )
        return _parse_response(response)

    async def destroy(self, public_id: str) -> dict[str, object]:
        """Delete an uploaded image via the signed Upload API."""
        url = f"{self.base_url}/{self.cloud_name}/image/destroy"
        params: dict[str, str] = {
            "public_id": public_id,
            "timestamp": str(int(time.time())),
        }
        payload = {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        response = await self.http_client.post(url, data=payload, timeout=self.timeout)
        return _parse_response(response)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Return the SHA-1 signature Cloudinary expects for signed requests."""
    to_sign = "&".join(
        f"{key}={value}" for key, value in sorted(params.items()) if value
    )
    return hashlib.sha1(
        f"{to_sign}{api_secret}".encode(), usedforsecurity=False
    ).hexdigest()


def _quote_public_id(public_id: str) -> str:
    """Percent-encode each path segment of a public id."""
    return "/".join(quote(part, safe="") for part in public_id.split("/"))


def _parse_response(response: httpx.Response) -> dict[str, object]:
    """Return the JSON body or raise a CloudinaryError for error statuses."""
    if response.is_error:
        raise CloudinaryError(_error_message(response), response.status_code)
    return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"Cloudinary request failed with status {response.status_code}"
