import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from pdfsplit.naming import base_name_for
from pdfsplit.oracle import PypdfOracle, SerializationOracle
from pdfsplit.planner import OutputChunk, plan_and_materialize, split_pages

logger = logging.getLogger(__name__)

MODE_SIZE = "size"
MODE_PAGE = "page"
MODES = (MODE_SIZE, MODE_PAGE)

DEFAULT_MAX_CHUNK_SIZE = 10 * 1024 * 1024


@dataclass
class SplitRequest:
    source_bytes: bytes
    file_name: str
    mode: str = MODE_SIZE
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE


@dataclass
class SplitResult:
    file_name: str
    mode: str
    total_pages: int
    chunks: List[OutputChunk] = field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(chunk.size for chunk in self.chunks)

    @property
    def is_empty(self) -> bool:
        return not self.chunks


def _validate_ceiling(ceiling_bytes) -> None:
    if isinstance(ceiling_bytes, bool) or not isinstance(ceiling_bytes, int):
        raise ValueError(f"Size ceiling must be an integer number of bytes, got {ceiling_bytes!r}")
    if ceiling_bytes <= 0:
        raise ValueError(f"Size ceiling must be positive, got {ceiling_bytes}")


def _run(source_bytes: bytes, file_name: str, mode: str, ceiling_bytes: Optional[int],
         oracle: Optional[SerializationOracle], cancel: Optional[threading.Event]) -> SplitResult:
    oracle = oracle or PypdfOracle()
    source = oracle.load(source_bytes)
    try:
        total_pages = oracle.page_count(source)
        base_name = base_name_for(file_name)
        if mode == MODE_SIZE:
            logger.info(f"Splitting {file_name} ({total_pages} pages) into chunks of max {ceiling_bytes} bytes")
            chunks = plan_and_materialize(oracle, source, total_pages, ceiling_bytes, base_name, cancel=cancel)
        else:
            logger.info(f"Splitting {file_name} ({total_pages} pages) into one file per page")
            chunks = split_pages(oracle, source, total_pages, base_name, cancel=cancel)
    finally:
        oracle.release(source)

    if total_pages == 0:
        logger.warning(f"PDF {file_name} has no pages")
    else:
        logger.info(f"Successfully split {file_name} into {len(chunks)} files")
    return SplitResult(file_name=file_name, mode=mode, total_pages=total_pages, chunks=chunks)


def split_by_size(source_bytes: bytes, file_name: str, ceiling_bytes: int,
                  oracle: Optional[SerializationOracle] = None,
                  cancel: Optional[threading.Event] = None) -> List[OutputChunk]:
    """
    Split a PDF into chunks whose serialized size stays at or under ``ceiling_bytes``.

    Args:
        source_bytes: The whole source PDF
        file_name: Source file name, used to name the chunks
        ceiling_bytes: Maximum size of each chunk in bytes
        oracle: PDF engine to probe with (defaults to pypdf)
        cancel: Optional token with ``is_set()``, checked between serializations

    Returns:
        Chunks in page order. A single page that is larger than the ceiling on
        its own is still returned as its own chunk. An empty document gives an
        empty list.

    Raises:
        ValueError: If the ceiling is not a positive integer
        LoadError, ExtractionError, SerializationError: The whole split failed
        SplitCancelled: The cancel token was set
    """
    _validate_ceiling(ceiling_bytes)
    return _run(source_bytes, file_name, MODE_SIZE, ceiling_bytes, oracle, cancel).chunks


def split_by_page(source_bytes: bytes, file_name: str,
                  oracle: Optional[SerializationOracle] = None,
                  cancel: Optional[threading.Event] = None) -> List[OutputChunk]:
    """Split a PDF into one chunk per page, in page order."""
    return _run(source_bytes, file_name, MODE_PAGE, None, oracle, cancel).chunks


def split(request: SplitRequest, oracle: Optional[SerializationOracle] = None,
          cancel: Optional[threading.Event] = None) -> SplitResult:
    if request.mode not in MODES:
        raise ValueError(f"Unknown split mode {request.mode!r}, expected one of {MODES}")
    if request.mode == MODE_SIZE:
        _validate_ceiling(request.max_chunk_size)
        ceiling = request.max_chunk_size
    else:
        ceiling = None
    return _run(request.source_bytes, request.file_name, request.mode, ceiling, oracle, cancel)
