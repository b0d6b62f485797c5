"""Test helpers: in-memory images and a scriptable remote fetcher."""
import io

from PIL import Image

from image_report.errors import FetchError
from image_report.services.fetch_service import FetchedImage

BUCKET = "test-bucket"
PUBLIC_BASE_URL = "https://test-bucket.s3.us-east-1.amazonaws.com"


def make_image_bytes(fmt: str = "PNG", size=(4, 3), color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


class FakeFetcher:
    """Stand-in for ``RemoteFetcher``.

    URLs registered in *responses* return their bytes; URLs in *failures*
    raise ``FetchError``; anything else is treated as unreachable too.
    """

    def __init__(self, responses=None, failures=(), content_type="image/png"):
        self.responses = dict(responses or {})
        self.failures = set(failures)
        self.content_type = content_type
        self.calls = []

    def fetch_bytes(self, url: str) -> FetchedImage:
        self.calls.append(url)
        if url in self.failures or url not in self.responses:
            raise FetchError(f"GET {url} failed: connection refused")
        return FetchedImage(content=self.responses[url], content_type=self.content_type)
