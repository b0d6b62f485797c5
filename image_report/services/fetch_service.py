"""Outbound HTTP GET for image bytes."""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx

from image_report.config import get_settings
from image_report.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass
class FetchedImage:
    content: bytes
    content_type: Optional[str]


class RemoteFetcher:
    """Binary GET with a bounded per-request timeout.

    One ``httpx.Client`` is shared for the life of the process so that
    connections to repeat hosts are pooled.
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.Client] = None):
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch_bytes(self, url: str) -> FetchedImage:
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"GET {url} returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc

        content_type = resp.headers.get("content-type")
        logger.debug("Fetched %d bytes from %s (content-type=%s)", len(resp.content), url, content_type)
        return FetchedImage(content=resp.content, content_type=content_type)

    def close(self):
        self._client.close()


@lru_cache()
def get_fetcher() -> RemoteFetcher:
    return RemoteFetcher(timeout=get_settings().FETCH_TIMEOUT_SECONDS)
