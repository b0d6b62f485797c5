"""PDF report of every upload record, one row per image, using reportlab.

Positions are tracked top-down (y grows towards the bottom of the page) and
flipped to reportlab's bottom-left origin only when something is drawn.
"""
import io
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Sequence

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from image_report.config import get_settings
from image_report.errors import NoDataError
from image_report.models.upload_record import UploadRecord
from image_report.services.fetch_service import RemoteFetcher, get_fetcher

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
TITLE_FONT_SIZE = 18
BODY_FONT_SIZE = 12
TITLE_Y = 72

HEADER_Y = 100
HEADER_GAP = 20
MAX_Y = 700
COLUMNS = (
    ("Image", 50),
    ("Size (KB)", 200),
    ("Width", 300),
    ("Height", 400),
    ("Format", 500),
)
IMAGE_X = COLUMNS[0][1]
THUMBNAIL_WIDTH = 100
THUMBNAIL_HEIGHT = 100
ROW_MARGIN = 20
FAILED_ROW_ADVANCE = 20
PLACEHOLDER_TEXT = "Error loading image"

CHUNK_SIZE = 64 * 1024


@dataclass
class ReportStats:
    rows: int = 0
    failed_rows: int = 0
    pages: int = 1


class ReportGenerator:
    """Renders upload records as a paginated table with a thumbnail per row.

    Each row re-fetches its image from the stored URL, one at a time. A row
    whose image cannot be fetched or decoded gets a placeholder line instead
    and the report carries on.
    """

    def __init__(self, fetcher: RemoteFetcher, canvas_factory=canvas.Canvas,
                 title: str = "Image Upload Report", pagesize=letter):
        self.fetcher = fetcher
        self.canvas_factory = canvas_factory
        self.title = title
        self.page_width, self.page_height = pagesize
        self.pagesize = pagesize

    def render(self, records: Sequence[UploadRecord]) -> bytes:
        """Return the finished PDF for *records*.

        Raises ``NoDataError`` before any document is opened when *records*
        is empty.
        """
        if not records:
            raise NoDataError()
        buf = io.BytesIO()
        c = self.canvas_factory(buf, pagesize=self.pagesize)
        stats = self.draw(c, records)
        c.save()
        logger.info("Rendered report: %d rows (%d failed) on %d page(s)",
                    stats.rows, stats.failed_rows, stats.pages)
        return buf.getvalue()

    def draw(self, c, records: Sequence[UploadRecord]) -> ReportStats:
        stats = ReportStats()

        c.setTitle(self.title)
        c.setFont(FONT_NAME, TITLE_FONT_SIZE)
        c.drawCentredString(self.page_width / 2, self._flip(TITLE_Y, TITLE_FONT_SIZE), self.title)
        y = self._draw_header(c, HEADER_Y)

        for record in records:
            # Page break is decided once per row, never mid-row.
            if y > MAX_Y:
                c.showPage()
                stats.pages += 1
                y = self._draw_header(c, HEADER_Y)

            try:
                image = self._load_image(record.imageurl)
            except Exception as exc:
                logger.warning("Error loading image for URL %s: %s", record.imageurl, exc)
                c.drawString(IMAGE_X, self._flip(y, BODY_FONT_SIZE), PLACEHOLDER_TEXT)
                y += FAILED_ROW_ADVANCE
                stats.failed_rows += 1
            else:
                c.drawImage(
                    image,
                    IMAGE_X,
                    self._flip(y, THUMBNAIL_HEIGHT),
                    width=THUMBNAIL_WIDTH,
                    height=THUMBNAIL_HEIGHT,
                )
                values = (record.size, record.width, record.height, record.format)
                for (_, x), value in zip(COLUMNS[1:], values):
                    c.drawString(x, self._flip(y, BODY_FONT_SIZE), str(value))
                y += THUMBNAIL_HEIGHT + ROW_MARGIN
            stats.rows += 1

        return stats

    def _load_image(self, url: str) -> ImageReader:
        fetched = self.fetcher.fetch_bytes(url)
        image = ImageReader(io.BytesIO(fetched.content))
        # Forces the image to be identified now rather than at drawImage time.
        image.getSize()
        return image

    def _draw_header(self, c, y: float) -> float:
        c.setFont(FONT_NAME, BODY_FONT_SIZE)
        for label, x in COLUMNS:
            c.drawString(x, self._flip(y, BODY_FONT_SIZE), label)
        return y + HEADER_GAP

    def _flip(self, y: float, height: float) -> float:
        return self.page_height - y - height


def iter_chunks(data: bytes, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]


@lru_cache()
def get_report_generator() -> ReportGenerator:
    return ReportGenerator(get_fetcher(), title=get_settings().REPORT_TITLE)
