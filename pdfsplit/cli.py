#!/usr/bin/env python3
"""Split a PDF into chunks under a given size (MB), or into one file per page."""
import argparse
import logging
import os
import sys
from typing import List, Optional

from pdfsplit.config import load_config
from pdfsplit.errors import PdfSplitError
from pdfsplit.naming import archive_name_for
from pdfsplit.packager import ZipPackager
from pdfsplit.planner import OutputChunk
from pdfsplit.splitter import MODE_PAGE, SplitRequest, split
from pdfsplit.utils import format_bytes, megabytes_to_bytes, safe_file_name, setup_logging

logger = logging.getLogger(__name__)


def write_chunks(chunks: List[OutputChunk], out_dir: str, slugify_names: bool = False) -> List[str]:
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for chunk in chunks:
        name = safe_file_name(chunk.name) if slugify_names else chunk.name
        output_filename = os.path.join(out_dir, name)
        with open(output_filename, "wb") as f:
            f.write(chunk.content)
        paths.append(output_filename)
    return paths


def write_archive(chunks: List[OutputChunk], file_name: str, out_dir: str, slugify_names: bool = False) -> str:
    os.makedirs(out_dir, exist_ok=True)
    name = archive_name_for(file_name)
    if slugify_names:
        name = safe_file_name(name)
    output_filename = os.path.join(out_dir, name)
    with open(output_filename, "wb") as f:
        f.write(ZipPackager().package(chunks))
    return output_filename


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split a PDF into chunks under a given size (MB), or one file per page."
    )
    parser.add_argument(
        "-f", "--filename",
        required=True,
        help="Path to the input PDF file",
    )
    parser.add_argument(
        "-s", "--size",
        type=float,
        default=None,
        dest="size_mb",
        help="Maximum size per output chunk in megabytes (default: 10, or pdf_splitter.max_chunk_size_mb)",
    )
    parser.add_argument(
        "--by-page",
        action="store_true",
        help="Write one output file per page instead of size-bounded chunks",
    )
    parser.add_argument(
        "--out_dir",
        default=None,
        help="Directory for output chunk files (default: current directory)",
    )
    parser.add_argument(
        "--zip",
        action="store_true",
        help="Write a single .zip archive containing all chunks",
    )
    parser.add_argument(
        "--slugify",
        action="store_true",
        help="Sanitize output file names",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Optional YAML config file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every size probe",
    )
    parser.add_argument(
        "overrides",
        nargs="*",
        metavar="KEY=VALUE",
        help="Config overrides, e.g. pdf_splitter.safety_margin_mb=0.2",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config, args.overrides)
    setup_logging("DEBUG" if args.verbose else cfg.logging.get("level", "INFO"))
    split_cfg = cfg.pdf_splitter

    if not os.path.exists(args.filename):
        print(f"Error: File not found: {args.filename}", file=sys.stderr)
        return 1

    mode = MODE_PAGE if args.by_page else split_cfg.get("mode", "size")
    size_mb = args.size_mb if args.size_mb is not None else split_cfg.get("max_chunk_size_mb", 10)
    ceiling = megabytes_to_bytes(size_mb - split_cfg.get("safety_margin_mb", 0.0))
    if mode != MODE_PAGE and (size_mb <= 0 or ceiling <= 0):
        print("Error: size_mb must be positive", file=sys.stderr)
        return 1

    out_dir = args.out_dir or split_cfg.get("out_dir", ".")
    slugify_names = args.slugify or split_cfg.get("slugify_names", False)
    file_name = os.path.basename(args.filename)

    with open(args.filename, "rb") as f:
        request = SplitRequest(source_bytes=f.read(), file_name=file_name, mode=mode, max_chunk_size=ceiling)

    print(f"Processing {args.filename} ({format_bytes(len(request.source_bytes))})...")
    try:
        result = split(request)
    except PdfSplitError as e:
        logger.error(f"Failed to split {args.filename}: {e}")
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.is_empty:
        print(f"Error: nothing to split, {args.filename} has no pages", file=sys.stderr)
        return 1

    if args.zip or split_cfg.get("zip", False):
        archive = write_archive(result.chunks, file_name, out_dir, slugify_names)
        print(f"Saved {archive} ({len(result.chunks)} files)")
    else:
        for chunk, path in zip(result.chunks, write_chunks(result.chunks, out_dir, slugify_names)):
            print(f"Saved {path} ({format_bytes(chunk.size)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
