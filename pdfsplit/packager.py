import io
import logging
import zipfile
from typing import Iterable

from pdfsplit.planner import OutputChunk

logger = logging.getLogger(__name__)


class ZipPackager(object):
    """Bundles split chunks into one in-memory zip archive, in emission order."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.compression = compression

    def package(self, chunks: Iterable[OutputChunk]) -> bytes:
        buffer = io.BytesIO()
        count = 0
        with zipfile.ZipFile(buffer, "w", compression=self.compression) as zf:
            for chunk in chunks:
                zf.writestr(chunk.name, chunk.content)
                count += 1
        data = buffer.getvalue()
        logger.info(f"Packaged {count} chunks into a {len(data)} byte archive")
        return data
