"""Batch node: a root-only pseudo directory over an explicit list of paths."""

from __future__ import annotations

import logging
import os

from fs_hasher.core.types import FsType
from fs_hasher.tree.base import NodeBase, check_depth
from fs_hasher.tree.children import ChildSet
from fs_hasher.tree.directory import ContainerMixin

logger = logging.getLogger(__name__)


class BatchNode(ContainerMixin, NodeBase):
    node_type = FsType.BATCH

    def __init__(self, *, controller=None, event_bus=None) -> None:
        super().__init__(controller=controller, event_bus=event_bus)
        self._children = ChildSet(self._child_factory, event_bus)

    @property
    def source(self) -> str | None:
        if self._source is None:
            return None
        return ",".join(item for item in self._source if isinstance(item, str))

    @property
    def sources(self) -> list[str]:
        return list(self._source or [])

    def _normalize_source(self, source):
        if not isinstance(source, (list, tuple)):
            raise TypeError("BatchNode requires the source to be a list of paths")
        return [os.fspath(item) if isinstance(item, os.PathLike) else item for item in source if item]

    async def build(self, source, depth: int = 0) -> bool:
        check_depth(depth)
        if depth != 0:
            logger.debug("Batch rejected at depth %d: batches are root-only", depth)
            return False
        return await super().build(source, depth)

    async def _populate(self) -> bool:
        return await self._children.populate(self._source, self._depth + 1)
