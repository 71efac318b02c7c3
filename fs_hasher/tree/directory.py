"""Directory node: children are the entries read at build time."""

from __future__ import annotations

import logging
import os

from fs_hasher.core.fs import list_directory
from fs_hasher.core.types import DEFAULT_ALGORITHM, ComputeResult, FsType
from fs_hasher.tree.base import FsNode, NodeBase, Report, check_algorithm
from fs_hasher.tree.children import ChildSet
from fs_hasher.tree.file import FileNode

logger = logging.getLogger(__name__)


def make_child_node(fs_type: FsType, *, controller=None, event_bus=None) -> FsNode | None:
    if fs_type == FsType.DIRECTORY:
        return DirectoryNode(controller=controller, event_bus=event_bus)
    if fs_type == FsType.FILE:
        return FileNode(controller=controller, event_bus=event_bus)
    return None


class ContainerMixin:
    """Compute/report for nodes whose digest is combined from a ChildSet."""

    _children: ChildSet

    @property
    def children(self) -> list[FsNode]:
        return self._children.ordered

    @property
    def is_busy(self) -> bool:
        return self._busy or self._children.any_busy

    def _child_factory(self, fs_type: FsType) -> FsNode | None:
        return make_child_node(fs_type, controller=self._controller, event_bus=self._event_bus)

    async def compute(self, algorithm: str = DEFAULT_ALGORITHM) -> ComputeResult:
        check_algorithm(algorithm)
        if not self.source or self.is_busy:
            logger.debug("Compute of %r skipped: not built or busy", self.source)
            return ComputeResult(self.source, None)

        self._busy = True
        self._digest = None
        try:
            result = await self._children.compute(self.source, algorithm)
            self._digest = result.digest
        finally:
            self._busy = False
        return result

    async def report(self) -> Report:
        record = self._record()
        if record is None:
            return None
        self._busy = True
        try:
            return [record] + await self._children.report()
        finally:
            self._busy = False


class DirectoryNode(ContainerMixin, NodeBase):
    node_type = FsType.DIRECTORY

    def __init__(self, *, controller=None, event_bus=None) -> None:
        super().__init__(controller=controller, event_bus=event_bus)
        self._children = ChildSet(self._child_factory, event_bus)

    async def _populate(self) -> bool:
        try:
            names = await list_directory(self._source)
        except OSError as exc:
            logger.debug("Listing %s failed: %s", self._source, exc)
            self._children.clear()
            return False
        paths = [os.path.join(self._source, name) for name in names]
        return await self._children.populate(paths, self._depth + 1)
