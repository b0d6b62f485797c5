"""Image introspection helpers built on Pillow."""
import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from image_report.errors import ImageMetadataError


@dataclass
class ImageMetadata:
    width: int
    height: int
    format: str


def read_metadata(image_bytes: bytes) -> ImageMetadata:
    """Return width, height and lower-cased format name of *image_bytes*.

    ``Image.open`` only parses the header, so the pixel data is never decoded.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            width, height = img.size
            fmt = img.format
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageMetadataError(f"Unsupported or corrupt image data: {exc}") from exc
    if not fmt:
        raise ImageMetadataError("Image format could not be determined")
    return ImageMetadata(width=width, height=height, format=fmt.lower())


def format_size_label(num_bytes: int) -> str:
    """Human-readable size in kibibytes, e.g. 2048 -> ``"2.00 KB"``."""
    return f"{num_bytes / 1024:.2f} KB"


def mime_type_for(fmt: str) -> str:
    Image.init()
    return Image.MIME.get(fmt.upper(), "application/octet-stream")
