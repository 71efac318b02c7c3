"""Leaf node: one regular file hashed through the admission controller."""

from __future__ import annotations

import logging

from fs_hasher.admission.controller import FileHasherSerializer
from fs_hasher.admission.request import HashRequest
from fs_hasher.core.types import DEFAULT_ALGORITHM, ComputeResult, FsType
from fs_hasher.tree.base import NodeBase, check_algorithm

logger = logging.getLogger(__name__)


class FileNode(NodeBase):
    node_type = FsType.FILE

    async def _populate(self) -> bool:
        return True

    @property
    def _admission(self):
        return self._controller if self._controller is not None else FileHasherSerializer

    async def compute(self, algorithm: str = DEFAULT_ALGORITHM) -> ComputeResult:
        check_algorithm(algorithm)
        if not self.source or self.is_busy:
            logger.debug("Compute of %r skipped: not built or busy", self.source)
            return ComputeResult(self.source, None)

        self._busy = True
        self._digest = None
        try:
            request = HashRequest(self.source, algorithm)
            self._admission.submit_hash_request(request)
            result = await request.wait()
            if result.ok:
                self._digest = result.digest
            else:
                logger.debug("Hashing %s failed with %s", self.source, result.status.name)
        finally:
            self._busy = False
        return ComputeResult(self.source, self._digest)
