"""Stream worker: opens one file and feeds it through a digest accumulator."""

from __future__ import annotations

import asyncio
import errno
import logging
from typing import BinaryIO, Callable

from fs_hasher.admission.request import HashRequest
from fs_hasher.core.digest import DigestAccumulator, DigestEngine
from fs_hasher.core.errors import HashError
from fs_hasher.core.types import HashResult, HashStatus

logger = logging.getLogger(__name__)

Opener = Callable[[str], BinaryIO]

_RETRYABLE_ERRNOS = frozenset({errno.EMFILE, errno.ENFILE})
_DENIED_ERRNOS = frozenset({errno.EACCES, errno.EPERM})


def default_opener(path: str) -> BinaryIO:
    return open(path, "rb")


def classify_open_error(exc: OSError) -> HashStatus:
    if exc.errno in _RETRYABLE_ERRNOS:
        return HashStatus.TOO_MANY_FILES_OPEN
    if isinstance(exc, PermissionError) or exc.errno in _DENIED_ERRNOS:
        return HashStatus.ACCESS_DENIED
    return HashStatus.OTHER


class StreamWorker:
    """Hashes the file named by one request.

    ``prepare()`` is the admission-gated step (create the accumulator and
    open the file); ``stream()`` runs freely once the file is open.
    """

    def __init__(
        self,
        request: HashRequest,
        *,
        opener: Opener = default_opener,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self.request = request
        self._opener = opener
        self._chunk_size = chunk_size
        self._acc: DigestAccumulator | None = None
        self._stream: BinaryIO | None = None

    async def prepare(self) -> HashStatus:
        try:
            self._acc = DigestEngine.create(self.request.algorithm)
        except HashError:
            return HashStatus.INVALID_ALGORITHM

        try:
            self._stream = await asyncio.to_thread(self._opener, self.request.source)
        except OSError as exc:
            status = classify_open_error(exc)
            logger.debug("Open of %s failed: %s (%s)", self.request.source, exc, status.name)
            return status
        except Exception:
            logger.exception("Unexpected failure opening %s", self.request.source)
            return HashStatus.OTHER
        return HashStatus.OK

    async def stream(self) -> HashResult:
        if self._stream is None or self._acc is None:
            raise RuntimeError("stream() called before a successful prepare()")
        try:
            while True:
                chunk = await asyncio.to_thread(self._stream.read, self._chunk_size)
                if not chunk:
                    break
                self._acc.update(chunk)
        except OSError as exc:
            logger.warning("Read of %s failed after opening: %s", self.request.source, exc)
            return HashResult(HashStatus.OTHER)
        finally:
            await asyncio.to_thread(self._stream.close)
            self._stream = None
        return HashResult(HashStatus.OK, self._acc.hexdigest())
