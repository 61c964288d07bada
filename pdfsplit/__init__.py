from pdfsplit.errors import ExtractionError, LoadError, PdfSplitError, SerializationError, SplitCancelled
from pdfsplit.oracle import PypdfOracle, SerializationOracle, SourceDocument
from pdfsplit.planner import OutputChunk
from pdfsplit.splitter import SplitRequest, SplitResult, split, split_by_page, split_by_size

__all__ = [
    "ExtractionError",
    "LoadError",
    "OutputChunk",
    "PdfSplitError",
    "PypdfOracle",
    "SerializationError",
    "SerializationOracle",
    "SourceDocument",
    "SplitCancelled",
    "SplitRequest",
    "SplitResult",
    "split",
    "split_by_page",
    "split_by_size",
]
