"""Child management shared by directory and batch nodes.

Directory and batch nodes differ only in where their child paths come
from; building, computing, combining and reporting the children is the
same and lives in :class:`ChildSet`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable

from fs_hasher.core.digest import DigestEngine
from fs_hasher.core.errors import HashError
from fs_hasher.core.fs import get_file_system_type
from fs_hasher.core.types import ComputeResult, FsType, ReportRecord
from fs_hasher.observability.event_bus import HASH_ERROR, Event, EventBus
from fs_hasher.tree.base import FsNode

logger = logging.getLogger(__name__)

NodeFactory = Callable[[FsType], "FsNode | None"]


def combine_digests(results: Iterable[ComputeResult], algorithm: str) -> str | None:
    """Fold child digests into one, independent of child order.

    Results are sorted by digest. The first present digest is taken as is;
    every later one is fed into a single accumulator and the running
    digest becomes the accumulator's snapshot. One digest-bearing child
    therefore passes its digest through unchanged.
    """
    ordered = sorted(results, key=lambda r: (r.digest is not None, r.digest or ""))
    acc = DigestEngine.create(algorithm)
    digest: str | None = None
    for result in ordered:
        if result.digest is None:
            continue
        if digest is None:
            digest = result.digest
        else:
            acc.update(result.digest)
            digest = acc.snapshot()
    return digest


class ChildSet:
    def __init__(self, factory: NodeFactory, event_bus: EventBus | None = None) -> None:
        self._factory = factory
        self._event_bus = event_bus
        self._nodes: list[FsNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def clear(self) -> None:
        self._nodes = []

    @property
    def ordered(self) -> list[FsNode]:
        """Directories first, then files; each group by source path."""
        dirs = [n for n in self._nodes if n.type == FsType.DIRECTORY]
        files = [n for n in self._nodes if n.type != FsType.DIRECTORY]
        return sorted(dirs, key=lambda n: n.source) + sorted(files, key=lambda n: n.source)

    @property
    def any_busy(self) -> bool:
        return any(n.is_busy for n in self._nodes)

    async def populate(self, paths: list[str], depth: int) -> bool:
        """Classify ``paths``, create a node for each file or directory and
        build them all concurrently. Other entry kinds are skipped."""
        self.clear()
        types = await asyncio.gather(*(get_file_system_type(p) for p in paths))

        pending = []
        for path, fs_type in zip(paths, types):
            node = self._factory(fs_type)
            if node is None:
                logger.debug("Skipping %s (%s)", path, fs_type.name)
                continue
            self._nodes.append(node)
            pending.append(node.build(path, depth))

        results = await asyncio.gather(*pending)
        return all(results)

    async def compute(self, source: str, algorithm: str) -> ComputeResult:
        results = await asyncio.gather(*(n.compute(algorithm) for n in self.ordered))
        try:
            return ComputeResult(source, combine_digests(results, algorithm))
        except HashError as exc:
            error = HashError(source, algorithm, exc.detail or str(exc))
            logger.warning("%s", error)
            if self._event_bus is not None:
                await self._event_bus.emit(
                    Event(event_type=HASH_ERROR, source=source, algorithm=algorithm, payload={"detail": error.detail})
                )
            return ComputeResult(source, None, error)

    async def report(self) -> list[ReportRecord]:
        records: list[ReportRecord] = []
        for node in self.ordered:
            child_report = await node.report()
            if child_report is None:
                continue
            if isinstance(child_report, list):
                records.extend(child_report)
            else:
                records.append(child_report)
        return records
