"""FsHasher: the public entry point."""

from __future__ import annotations

import logging

from fs_hasher._version import __version__
from fs_hasher.admission.controller import AdmissionController
from fs_hasher.config import HasherConfig
from fs_hasher.core.errors import HashError, NotRegisteredError
from fs_hasher.core.fs import get_file_system_type, is_path_like
from fs_hasher.core.types import HASH_ALGORITHMS, FsType, ReportRecord
from fs_hasher.duplicates import find_duplicates
from fs_hasher.observability.event_bus import EventBus, InMemoryEventBus
from fs_hasher.report import format_csv_report
from fs_hasher.tree.base import FsNode
from fs_hasher.tree.batch import BatchNode
from fs_hasher.tree.directory import make_child_node

logger = logging.getLogger(__name__)


class FsHasher:
    """Builds a hash tree for a path (or list of paths), computes its digest
    and reports on it.

    Typical usage::

        hasher = FsHasher()
        if await hasher.build("some/folder"):
            digest = await hasher.compute("sha256")
            csv = await hasher.report()
            dups = await hasher.find_duplicates()
        hasher.destroy()
    """

    def __init__(
        self,
        config: HasherConfig | None = None,
        *,
        controller: AdmissionController | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._config = config or HasherConfig()
        self._event_bus = event_bus or InMemoryEventBus(self._config.event_history_limit)
        self._controller = controller or AdmissionController(
            self._config.admission, event_bus=self._event_bus
        )
        self._algorithm = self._config.default_algorithm
        self._root: FsNode | None = None
        self._last_error: HashError | None = None
        self._registered = True
        logger.debug("fs-hasher version: v%s", __version__)

    def destroy(self) -> None:
        """Invalidate this instance; any further use raises NotRegisteredError."""
        self._registered = False
        self._root = None

    def _ensure_registered(self) -> None:
        if not self._registered:
            raise NotRegisteredError("This instance of 'FsHasher' is no longer registered.")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def version(self) -> str:
        self._ensure_registered()
        return __version__

    @property
    def is_busy(self) -> bool:
        self._ensure_registered()
        return self._root is not None and self._root.is_busy

    @property
    def algorithm(self) -> str:
        self._ensure_registered()
        return self._algorithm

    @property
    def source(self) -> str:
        self._ensure_registered()
        if self._root is None:
            return ""
        return self._root.source or ""

    @property
    def event_bus(self) -> EventBus:
        self._ensure_registered()
        return self._event_bus

    @property
    def last_error(self) -> HashError | None:
        """Combination error from the most recent compute(), if any."""
        self._ensure_registered()
        return self._last_error

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def build(self, source) -> bool:
        """Build the tree for ``source`` (a path or a list of paths)."""
        self._ensure_registered()
        if not (is_path_like(source) or isinstance(source, (list, tuple))):
            raise TypeError("build() must take a path or a list of paths")

        self._root = None
        fs_type = await get_file_system_type(source)
        root = self._make_root(fs_type)
        if root is None:
            logger.debug("Build: %r is not a buildable source (%s)", source, fs_type.name)
            return False
        self._root = root
        return await root.build(source, 0)

    async def compute(self, algorithm: str | None = None) -> str:
        """Root digest as uppercase hex, or "" when none could be produced."""
        self._ensure_registered()
        if self._root is None or self._root.is_busy:
            logger.debug("Compute: root source not valid or is busy")
            return ""
        self._set_algorithm(algorithm)
        result = await self._root.compute(self._algorithm)
        self._last_error = result.error
        return result.digest or ""

    async def report(self) -> str:
        """CSV report (``type;>source;digest``), or "" when unavailable."""
        self._ensure_registered()
        if self._root is None or self._root.is_busy:
            logger.debug("Report: root source not valid or is busy")
            return ""
        records = await self._collect_records()
        indent = self._root.type in (FsType.DIRECTORY, FsType.BATCH)
        return format_csv_report(records, indent=indent)

    async def report_records(self) -> list[ReportRecord]:
        self._ensure_registered()
        if self._root is None or self._root.is_busy:
            return []
        return await self._collect_records()

    async def find_duplicates(self) -> dict[str, list[str]]:
        """Digests shared by two or more sources, mapped to those sources."""
        self._ensure_registered()
        if self._root is None or self._root.is_busy:
            logger.debug("FindDuplicates: root source not valid or is busy")
            return {}
        return find_duplicates(await self._collect_records())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _make_root(self, fs_type: FsType) -> FsNode | None:
        if fs_type == FsType.BATCH:
            return BatchNode(controller=self._controller, event_bus=self._event_bus)
        return make_child_node(fs_type, controller=self._controller, event_bus=self._event_bus)

    def _set_algorithm(self, algorithm) -> None:
        if algorithm is None or not isinstance(algorithm, str):
            self._algorithm = self._config.default_algorithm
            return
        if algorithm not in HASH_ALGORITHMS.values():
            logger.warning("Unknown algorithm '%s' specified. Use at your own risk.", algorithm)
        self._algorithm = algorithm

    async def _collect_records(self) -> list[ReportRecord]:
        report = await self._root.report()
        if report is None:
            return []
        if isinstance(report, list):
            return report
        return [report]
