"""
PDF load/extract/serialize operations used to probe candidate page groups.

The planner never looks inside a PDF. It only asks an oracle to copy a list of
pages into a fresh document and write it out, then measures the bytes.
"""
import io
import logging
from typing import List, Optional, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from pdfsplit.errors import ExtractionError, LoadError, SerializationError

logger = logging.getLogger(__name__)


class SourceDocument(object):
    """A loaded source PDF and the in-memory stream backing it."""

    def __init__(self, reader, page_count: int, stream: Optional[io.BytesIO] = None) -> None:
        self.reader = reader
        self.page_count = page_count
        self.stream = stream


class SerializationOracle(object):
    """Interface the planner probes. Subclasses supply the PDF engine."""

    def load(self, data: bytes) -> SourceDocument:
        raise NotImplementedError

    def page_count(self, source: SourceDocument) -> int:
        return source.page_count

    def extract_pages(self, source: SourceDocument, pages: Sequence[int]):
        raise NotImplementedError

    def serialize(self, document) -> bytes:
        raise NotImplementedError

    def release(self, source: SourceDocument) -> None:
        if source.stream is not None:
            source.stream.close()


class PypdfOracle(SerializationOracle):

    def __init__(self, password: Optional[str] = None) -> None:
        self.password = password

    def load(self, data: bytes) -> SourceDocument:
        stream = io.BytesIO(data)
        try:
            reader = PdfReader(stream)
            if reader.is_encrypted and not reader.decrypt(self.password or ""):
                raise LoadError("PDF is encrypted and could not be decrypted")
            source = SourceDocument(reader, len(reader.pages), stream)
        except LoadError:
            stream.close()
            raise
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
            stream.close()
            logger.error(f"Failed to read PDF ({len(data)} bytes): {e}")
            raise LoadError(f"Invalid or corrupted PDF file: {e}") from e
        logger.debug(f"Loaded PDF with {source.page_count} pages ({len(data)} bytes)")
        return source

    def extract_pages(self, source: SourceDocument, pages: Sequence[int]) -> PdfWriter:
        indices: List[int] = list(pages)
        if not indices:
            raise ExtractionError("Cannot extract an empty page group")
        bad = [i for i in indices if i < 0 or i >= source.page_count]
        if bad:
            raise ExtractionError(
                f"Page indices {bad} out of range for a {source.page_count}-page document")

        writer = PdfWriter()
        try:
            for i in indices:
                writer.add_page(source.reader.pages[i])
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
            raise ExtractionError(f"Failed to copy pages {indices[0]}-{indices[-1]}: {e}") from e
        return writer

    def serialize(self, document: PdfWriter) -> bytes:
        buffer = io.BytesIO()
        try:
            document.write(buffer)
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
            raise SerializationError(f"Failed to write PDF: {e}") from e
        return buffer.getvalue()
