import logging
import os

from slugify import slugify

_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Human readable size, base 1024: 0 -> '0 Bytes', 1536 -> '1.5 KB'."""
    if num_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while num_bytes >= 1024 ** (exponent + 1) and exponent < len(_UNITS) - 1:
        exponent += 1
    value = round(num_bytes / (1024 ** exponent), max(decimals, 0))
    text = f"{value:.{max(decimals, 0)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[exponent]}"


def megabytes_to_bytes(size_mb: float) -> int:
    return int(size_mb * 1024 * 1024)


def safe_file_name(name: str) -> str:
    """Slugify the stem of a file name and keep its extension."""
    path, extension = os.path.splitext(name)
    return f"{slugify(path)}{extension}"
