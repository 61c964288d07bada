class PdfSplitError(Exception):
    """Base class for failures that abort a whole split operation."""


class LoadError(PdfSplitError):
    """Input bytes could not be opened as a PDF document."""


class ExtractionError(PdfSplitError):
    """A page-index group could not be copied out of the source document."""


class SerializationError(PdfSplitError):
    """A page group could not be written back to bytes."""


class SplitCancelled(PdfSplitError):
    """The caller's cancel token was set while the split was running."""
