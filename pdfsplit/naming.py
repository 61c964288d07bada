import re

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


def base_name_for(file_name: str) -> str:
    """Strip one trailing .pdf (any case) from a source file name."""
    return _PDF_SUFFIX.sub("", file_name)


def name_for(base_name: str, index: int) -> str:
    """Name of the index-th emitted chunk, 1-based."""
    if index < 1:
        raise ValueError(f"Chunk index must be 1 or greater, got {index}")
    return f"{base_name}-part-{index}.pdf"


def archive_name_for(file_name: str) -> str:
    return f"{base_name_for(file_name)}.zip"
