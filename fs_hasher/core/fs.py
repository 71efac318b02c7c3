"""File-system probing used while building the hash tree.

Every blocking call goes through ``asyncio.to_thread`` so that probing a
large tree never stalls the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat

from fs_hasher.core.types import FsType

logger = logging.getLogger(__name__)


def is_path_like(value) -> bool:
    return isinstance(value, (str, os.PathLike))


def _probe_path(path: str) -> FsType:
    try:
        if not os.access(path, os.R_OK):
            return FsType.INVALID
        st = os.stat(path)
    except (OSError, ValueError):
        # Missing, inaccessible, or not a valid path at all.
        return FsType.INVALID
    if stat.S_ISDIR(st.st_mode):
        return FsType.DIRECTORY
    if stat.S_ISREG(st.st_mode):
        return FsType.FILE
    return FsType.OTHER


async def get_file_system_type(source) -> FsType:
    """Classify ``source`` as FILE, DIRECTORY, BATCH, OTHER or INVALID.

    A list (or tuple) is a BATCH only when every non-empty element is
    itself a readable file or directory; empty elements are ignored.
    """
    if is_path_like(source):
        path = os.fspath(source)
        if not path:
            return FsType.INVALID
        return await asyncio.to_thread(_probe_path, path)

    if isinstance(source, (list, tuple)):
        for item in source:
            if not item:
                continue
            if not is_path_like(item):
                return FsType.INVALID
            item_type = await get_file_system_type(item)
            if item_type not in (FsType.FILE, FsType.DIRECTORY):
                logger.debug("Batch member %r is not a file or directory (%s)", item, item_type.name)
                return FsType.INVALID
        return FsType.BATCH

    return FsType.INVALID


async def list_directory(path: str) -> list[str]:
    """Return the entry names of ``path``. Raises ``OSError`` on failure."""
    return await asyncio.to_thread(os.listdir, path)
