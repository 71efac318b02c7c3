"""FsNode protocol and the state shared by every node variant."""

from __future__ import annotations

import logging
import os
from typing import Protocol, Union

from fs_hasher.core.errors import AbstractViolationError, TypeMismatchError
from fs_hasher.core.fs import get_file_system_type
from fs_hasher.core.types import ComputeResult, FsType, ReportRecord
from fs_hasher.observability.event_bus import EventBus

logger = logging.getLogger(__name__)

Report = Union[ReportRecord, list[ReportRecord], None]


class FsNode(Protocol):
    @property
    def type(self) -> FsType: ...
    @property
    def source(self) -> str | None: ...
    @property
    def depth(self) -> int: ...
    @property
    def digest(self) -> str | None: ...
    @property
    def is_busy(self) -> bool: ...
    @property
    def children(self) -> list[FsNode]: ...

    async def build(self, source, depth: int) -> bool: ...
    async def compute(self, algorithm: str = "sha256") -> ComputeResult: ...
    async def report(self) -> Report: ...


def check_depth(depth) -> None:
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise TypeError(f"depth must be an integer, got {type(depth).__name__}")
    if depth < 0:
        raise ValueError(f"depth must be a non-negative integer. Depth:{depth}")


def check_algorithm(algorithm) -> None:
    if not isinstance(algorithm, str):
        raise TypeError(f"algorithm must be a string, got {type(algorithm).__name__}")


class NodeBase:
    """Source, depth, digest and busy handling common to all variants.

    Subclasses set ``node_type`` and implement ``_populate`` (called once
    the source has been probed and matched) plus ``compute``.
    """

    node_type: FsType | None = None

    def __init__(self, *, controller=None, event_bus: EventBus | None = None) -> None:
        if type(self) is NodeBase or self.node_type is None:
            raise AbstractViolationError(type(self).__name__)
        self._controller = controller
        self._event_bus = event_bus
        self._source = None
        self._digest: str | None = None
        self._depth = 0
        self._busy = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source!r}, depth={self._depth}, digest={self._digest!r})"

    @property
    def type(self) -> FsType:
        return self.node_type

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def digest(self) -> str | None:
        return self._digest

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def children(self) -> list[FsNode]:
        return []

    def _normalize_source(self, source):
        if isinstance(source, os.PathLike):
            return os.fspath(source)
        return source

    async def build(self, source, depth: int) -> bool:
        check_depth(depth)
        source = self._normalize_source(source)
        if self._busy:
            logger.debug("Build of %r skipped: node is busy", source)
            return False

        self._busy = True
        try:
            self._source = source
            self._digest = None
            self._depth = depth

            observed = await get_file_system_type(source)
            if observed == FsType.INVALID:
                logger.debug("Build of %r failed: invalid or unreadable source", source)
                return False
            if observed != self.node_type:
                raise TypeMismatchError(self.node_type.name, observed.name, type(self).__name__)
            return await self._populate()
        finally:
            self._busy = False

    async def _populate(self) -> bool:
        raise AbstractViolationError(f"{type(self).__name__}._populate")

    async def compute(self, algorithm: str = "sha256") -> ComputeResult:
        raise AbstractViolationError(f"{type(self).__name__}.compute")

    def _record(self) -> ReportRecord | None:
        if not self.source or self.is_busy:
            return None
        return ReportRecord(type=self.node_type, source=self.source, depth=self._depth, digest=self._digest)

    async def report(self) -> Report:
        return self._record()
