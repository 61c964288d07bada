import io

import pytest
from pypdf import PdfReader, PdfWriter

from pdfsplit.errors import ExtractionError, LoadError, SerializationError
from pdfsplit.oracle import SerializationOracle, SourceDocument

MB = 1024 * 1024


class FakeOracle(SerializationOracle):
    """Oracle whose serialized size is the sum of fixed per-page sizes plus overhead."""

    def __init__(self, page_sizes, overhead=0, fail_on=None):
        self.page_sizes = list(page_sizes)
        self.overhead = overhead
        self.fail_on = {tuple(group) for group in (fail_on or [])}
        self.extracted = []
        self.serialized = []
        self.released = False

    def load(self, data):
        if data == b"corrupt":
            raise LoadError("Invalid or corrupted PDF file")
        return SourceDocument(reader=None, page_count=len(self.page_sizes))

    def extract_pages(self, source, pages):
        pages = tuple(pages)
        if not pages or any(i < 0 or i >= source.page_count for i in pages):
            raise ExtractionError(f"bad pages {pages}")
        self.extracted.append(pages)
        return pages

    def serialize(self, document):
        self.serialized.append(document)
        if document in self.fail_on:
            raise SerializationError(f"cannot write {document}")
        body = b"".join(bytes([i % 256]) * self.page_sizes[i] for i in document)
        return b"H" * self.overhead + body

    def release(self, source):
        self.released = True


def make_pdf(page_count: int) -> bytes:
    """Blank pages, page i is 72 + i points wide so order can be checked."""
    writer = PdfWriter()
    for i in range(page_count):
        writer.add_blank_page(width=72 + i, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_widths(pdf_bytes: bytes):
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return [int(round(float(page.mediabox.width))) - 72 for page in reader.pages]


@pytest.fixture
def fake_oracle_factory():
    return FakeOracle


@pytest.fixture
def sample_pdf():
    return make_pdf(6)
