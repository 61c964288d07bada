"""
Chunk planning and materialization.

Serialized PDF size is not the sum of per-page sizes (fonts, images and object
streams are shared between pages), so the planner measures every candidate
group by asking the oracle to serialize it. Pages are consumed in ascending
order; each page either extends the group under construction or, when the
extended group no longer fits under the ceiling, closes that group and starts
the next one.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pdfsplit.errors import SplitCancelled
from pdfsplit.naming import name_for
from pdfsplit.oracle import SerializationOracle, SourceDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputChunk:
    name: str
    content: bytes
    pages: Tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.content)


class PlannerState(Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZING = "finalizing"


class Transition(Enum):
    OPEN = "open"
    # first page of a group is accepted even when it alone exceeds the ceiling
    OPEN_OVERSIZED = "open_oversized"
    EXTEND = "extend"
    SPILL = "spill"


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise SplitCancelled("Split cancelled by caller")


class ChunkPlanner(object):
    """
    Greedy forward scan over page indices with a one-page lookahead probe.

    Feed pages in ascending order with ``feed``. After a ``SPILL`` the planner
    sits in ``FINALIZING`` until the closed group is collected with
    ``take_closed``. Call ``close`` after the last page to collect the final
    group.

    The bytes of the last accepted probe are the serialization of the current
    group, so they are handed back with the group and the materializer does not
    serialize it a second time. A group opened by a spill has not been probed
    on its own and carries no bytes.
    """

    def __init__(self, oracle: SerializationOracle, source: SourceDocument, ceiling: int) -> None:
        self.oracle = oracle
        self.source = source
        self.ceiling = ceiling
        self.state = PlannerState.EMPTY
        self.group: List[int] = []
        self.group_bytes: Optional[bytes] = None
        self.probe_count = 0
        self._closed: Optional[Tuple[List[int], Optional[bytes]]] = None

    def probe(self, pages: Sequence[int]) -> bytes:
        self.probe_count += 1
        document = self.oracle.extract_pages(self.source, pages)
        data = self.oracle.serialize(document)
        logger.debug(f"Probe {self.probe_count}: pages {pages[0]}-{pages[-1]} -> {len(data)} bytes")
        return data

    def feed(self, page: int) -> Transition:
        if self.state == PlannerState.FINALIZING:
            raise RuntimeError("Closed group must be collected before feeding more pages")

        candidate = self.group + [page]
        data = self.probe(candidate)

        if len(data) > self.ceiling and self.group:
            self._closed = (self.group, self.group_bytes)
            self.group = [page]
            self.group_bytes = None
            self.state = PlannerState.FINALIZING
            return Transition.SPILL

        opening = not self.group
        self.group = candidate
        self.group_bytes = data
        self.state = PlannerState.ACCUMULATING
        if not opening:
            return Transition.EXTEND
        if len(data) > self.ceiling:
            logger.debug(f"Page {page + 1} opens a group over the limit ({len(data)} > {self.ceiling} bytes)")
            return Transition.OPEN_OVERSIZED
        return Transition.OPEN

    def take_closed(self) -> Tuple[List[int], Optional[bytes]]:
        if self.state != PlannerState.FINALIZING or self._closed is None:
            raise RuntimeError("No closed group to collect")
        closed, self._closed = self._closed, None
        self.state = PlannerState.ACCUMULATING
        return closed

    def close(self) -> Optional[Tuple[List[int], Optional[bytes]]]:
        if self.state == PlannerState.FINALIZING:
            raise RuntimeError("Closed group must be collected before closing")
        if not self.group:
            return None
        remaining = (self.group, self.group_bytes)
        self.group = []
        self.group_bytes = None
        self.state = PlannerState.EMPTY
        return remaining


class ChunkMaterializer(object):
    """Turns planned page groups into named output chunks, numbering them in emission order."""

    def __init__(self, oracle: SerializationOracle, source: SourceDocument, base_name: str) -> None:
        self.oracle = oracle
        self.source = source
        self.base_name = base_name
        self.chunks: List[OutputChunk] = []

    def emit(self, pages: Sequence[int], content: Optional[bytes] = None) -> OutputChunk:
        if content is None:
            content = self.oracle.serialize(self.oracle.extract_pages(self.source, pages))
        chunk = OutputChunk(
            name=name_for(self.base_name, len(self.chunks) + 1),
            content=content,
            pages=tuple(pages),
        )
        self.chunks.append(chunk)
        logger.info(f"Created chunk {len(self.chunks)}: {chunk.name} ({len(pages)} pages, {chunk.size} bytes)")
        return chunk


def _warn_if_oversized(chunk: OutputChunk, ceiling: int) -> None:
    if chunk.size > ceiling:
        logger.warning(
            f"Page {chunk.pages[0] + 1} alone exceeds size limit ({chunk.size} > {ceiling} bytes). "
            f"Saved as {chunk.name}")


def plan_and_materialize(oracle: SerializationOracle, source: SourceDocument, total_pages: int,
                         ceiling: int, base_name: str, cancel: Optional[threading.Event] = None) -> List[OutputChunk]:
    if total_pages == 0:
        return []

    planner = ChunkPlanner(oracle, source, ceiling)
    materializer = ChunkMaterializer(oracle, source, base_name)

    for page in range(total_pages):
        _check_cancel(cancel)
        if planner.feed(page) == Transition.SPILL:
            pages, content = planner.take_closed()
            _check_cancel(cancel)
            _warn_if_oversized(materializer.emit(pages, content), ceiling)

    remaining = planner.close()
    if remaining is not None:
        _check_cancel(cancel)
        _warn_if_oversized(materializer.emit(*remaining), ceiling)

    logger.debug(f"Planned {len(materializer.chunks)} chunks with {planner.probe_count} probes")
    return materializer.chunks


def split_pages(oracle: SerializationOracle, source: SourceDocument, total_pages: int,
                base_name: str, cancel: Optional[threading.Event] = None) -> List[OutputChunk]:
    materializer = ChunkMaterializer(oracle, source, base_name)
    for page in range(total_pages):
        _check_cancel(cancel)
        materializer.emit([page])
    return materializer.chunks
