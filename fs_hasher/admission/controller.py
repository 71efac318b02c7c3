"""Admission controller: serializes file-open attempts for hashing.

Only the *opening* step is gated. Once a file is open its worker streams
independently, so many large files can hash concurrently while a burst of
new requests can never exhaust the process's file descriptors: a request
whose open fails with EMFILE/ENFILE stays at the head of the queue and is
retried after ``retry_delay_seconds``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Callable

from fs_hasher.admission.request import HashRequest
from fs_hasher.admission.worker import Opener, StreamWorker, default_opener
from fs_hasher.config import AdmissionConfig
from fs_hasher.core.errors import NotCreatableError
from fs_hasher.core.types import HashResult, HashStatus
from fs_hasher.observability.event_bus import (
    HASH_COMPLETE,
    HASH_DEQUEUED,
    HASH_PENDING,
    SERIALIZER_IDLE,
    Event,
    EventBus,
)

logger = logging.getLogger(__name__)

IdleCallback = Callable[["AdmissionController"], Any]


def _check_request(request) -> None:
    if not isinstance(request, HashRequest):
        raise TypeError("request needs to be an instance of HashRequest")


class AdmissionController:
    """FIFO queue of hash requests plus the set of streaming workers."""

    def __init__(
        self,
        config: AdmissionConfig | None = None,
        *,
        opener: Opener = default_opener,
        event_bus: EventBus | None = None,
        on_idle: IdleCallback | None = None,
    ) -> None:
        self._config = config or AdmissionConfig()
        self._opener = opener
        self._event_bus = event_bus
        self._idle_callbacks: list[IdleCallback] = [on_idle] if on_idle else []

        self._queue: deque[HashRequest] = deque()
        self._active: set[StreamWorker] = set()
        self._tasks: set[asyncio.Task] = set()
        self._running = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._retry_handle: asyncio.TimerHandle | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return bool(self._queue) or bool(self._active)

    @property
    def queued_count(self) -> int:
        return len(self._queue)

    @property
    def active_count(self) -> int:
        return len(self._active)

    def add_idle_callback(self, callback: IdleCallback) -> None:
        self._idle_callbacks.append(callback)

    def submit_hash_request(self, request: HashRequest) -> None:
        """Queue ``request``; await ``request.wait()`` for its result."""
        _check_request(request)
        if request in self._queue or request.done:
            raise ValueError(f"{request!r} was already submitted")
        self._loop = asyncio.get_running_loop()
        request._attach(self._loop)
        self._queue.append(request)
        logger.debug("Queued %s (%d queued, %d active)", request.source, len(self._queue), len(self._active))
        self._process_requests()

    def rescind_hash_request(self, request: HashRequest) -> bool:
        """Withdraw a queued request that is not mid-open.

        The request's waiter sees ``asyncio.CancelledError``. Requests that
        are already streaming are unaffected.
        """
        _check_request(request)
        if request not in self._queue or request.pending:
            return False
        self._queue.remove(request)
        request._cancel()
        logger.debug("Rescinded %s", request.source)
        self._check_idle()
        return True

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def _process_requests(self) -> None:
        if self._running or not self._queue or self._loop is None:
            return
        self._running = True
        self._spawn(self._process_step())

    async def _process_step(self) -> None:
        try:
            if not self._queue:
                return
            request = self._queue[0]
            request.dequeue_count += 1
            request.pending = True
            await self._emit(HASH_DEQUEUED, request, dequeue_count=request.dequeue_count)

            worker = StreamWorker(request, opener=self._opener, chunk_size=self._config.chunk_size)
            status = await worker.prepare()
            request.pending = False

            if status == HashStatus.TOO_MANY_FILES_OPEN and not self._retries_exhausted(request):
                logger.debug("Too many open files; %s stays queued (attempt %d)", request.source, request.dequeue_count)
                return

            head = self._queue.popleft()
            if head is not request:
                raise RuntimeError("admission queue head changed during an open attempt")

            if status == HashStatus.OK:
                self._active.add(worker)
                self._spawn(self._run_worker(worker))
                await self._emit(HASH_PENDING, request)
            else:
                await self._finish(request, HashResult(status))
        finally:
            self._running = False
            self._reschedule_or_idle()

    async def _run_worker(self, worker: StreamWorker) -> None:
        try:
            result = await worker.stream()
        except Exception:
            logger.exception("Streaming %s failed", worker.request.source)
            result = HashResult(HashStatus.OTHER)
        self._active.discard(worker)
        await self._finish(worker.request, result)
        self._reschedule_or_idle()

    async def _finish(self, request: HashRequest, result: HashResult) -> None:
        request._complete(result)
        await self._emit(HASH_COMPLETE, request, status=result.status.name, digest=result.digest)

    def _retries_exhausted(self, request: HashRequest) -> bool:
        limit = self._config.max_open_retries
        return limit is not None and request.retries >= limit

    def _reschedule_or_idle(self) -> None:
        if self._queue:
            if self._retry_handle is None and self._loop is not None:
                self._retry_handle = self._loop.call_later(
                    self._config.retry_delay_seconds, self._on_retry_timer
                )
        else:
            self._check_idle()

    def _on_retry_timer(self) -> None:
        self._retry_handle = None
        self._process_requests()

    def _check_idle(self) -> None:
        if self._running or self.is_active or self._loop is None:
            return
        if self._retry_handle is not None:
            self._retry_handle.cancel()
            self._retry_handle = None
        if self._event_bus is not None:
            self._spawn(self._emit(SERIALIZER_IDLE, None))
        # Tear down: the next submission binds to whatever loop is running then.
        self._loop = None
        logger.debug("Admission controller idle")
        for callback in list(self._idle_callbacks):
            callback(self)

    def _spawn(self, coro) -> None:
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _emit(self, event_type: str, request: HashRequest | None, **payload) -> None:
        if self._event_bus is None:
            return
        event = Event(
            event_type=event_type,
            source=request.source if request else None,
            algorithm=request.algorithm if request else None,
            payload=payload,
        )
        # Handler failures must not stall the queue or strand a request.
        try:
            await self._event_bus.emit(event)
        except Exception:
            logger.exception("Event handler failed for %s", event_type)


class FileHasherSerializer:
    """Static, process-wide access to a shared :class:`AdmissionController`.

    The shared controller is created on first submission and discarded
    as soon as it goes idle.
    """

    _instance: AdmissionController | None = None

    def __init__(self) -> None:
        raise NotCreatableError("FileHasherSerializer")

    @staticmethod
    def instance() -> AdmissionController | None:
        return FileHasherSerializer._instance

    @staticmethod
    def submit_hash_request(request: HashRequest) -> None:
        _check_request(request)
        if FileHasherSerializer._instance is None:
            FileHasherSerializer._instance = AdmissionController(on_idle=_destroy_shared)
        FileHasherSerializer._instance.submit_hash_request(request)

    @staticmethod
    def rescind_hash_request(request: HashRequest) -> bool:
        _check_request(request)
        if FileHasherSerializer._instance is None:
            return False
        return FileHasherSerializer._instance.rescind_hash_request(request)


def _destroy_shared(controller: AdmissionController) -> None:
    if FileHasherSerializer._instance is controller and not controller.is_active:
        logger.debug("Destroying the shared admission controller")
        FileHasherSerializer._instance = None
