"""
Quiz Persistence.

Partial profile saves are fire-and-forget: the engine enqueues a job carrying a
snapshot taken at enqueue time, and a single background worker drains the
queue in FIFO order. Saves therefore land in stage order, and a later stage
never overwrites an earlier one with stale data.

Failures are recorded as warnings and never reach navigation.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from .errors import PersistenceError
from .stages import Stage

logger = logging.getLogger(__name__)

CREATE_SESSION = "create_session"
SAVE = "save"


# =============================================================================
# Client Contract
# =============================================================================

class PersistenceClient(ABC):
    """
    Backing store for quiz sessions.

    Both calls must tolerate duplicates: saves are upserts by field.
    """

    @abstractmethod
    async def create_session(self, contact: dict) -> str:
        """Create a session from parent contact info and return its id."""

    @abstractmethod
    async def save(self, session_id: str, fields: dict) -> None:
        """Upsert a slice of profile fields for a session."""


class InMemoryPersistenceClient(PersistenceClient):
    """
    Dict-backed client for local runs and tests.

    Set `fail` to make every call raise PersistenceError.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sessions: dict[str, dict] = {}
        self.calls: list[tuple[str, str | None, dict]] = []

    async def create_session(self, contact: dict) -> str:
        self.calls.append((CREATE_SESSION, None, contact))
        if self.fail:
            raise PersistenceError("Store unavailable")
        session_id = str(uuid.uuid4())
        self.sessions[session_id] = dict(contact)
        return session_id

    async def save(self, session_id: str, fields: dict) -> None:
        self.calls.append((SAVE, session_id, fields))
        if self.fail:
            raise PersistenceError("Store unavailable")
        if session_id not in self.sessions:
            raise PersistenceError(f"Unknown session: {session_id}")
        self.sessions[session_id].update(fields)


# =============================================================================
# Jobs
# =============================================================================

@dataclass(frozen=True)
class PersistenceJob:
    """One queued persistence call."""
    operation: str  # CREATE_SESSION or SAVE
    stage: Stage
    fields: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PersistenceWarning:
    """Non-fatal persistence failure, kept for diagnostic display."""
    stage: Stage
    operation: str
    error: str
    at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class PersistenceQueue:
    """
    FIFO queue of persistence jobs with a single background worker.

    One queue per quiz session. The first successful create_session job fixes
    the session id; save jobs queued behind it reuse that id.
    """

    def __init__(
        self,
        client: PersistenceClient,
        maxsize: int = 0,
        on_session: Callable[[str], None] | None = None,
    ):
        self.client = client
        self.maxsize = maxsize
        self.on_session = on_session
        self.session_id: str | None = None
        self.session_requested = False
        self.warnings: list[PersistenceWarning] = []
        self._queue: asyncio.Queue | None = None
        self._worker: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # -------------------------------------------------------------------------
    # Enqueue
    # -------------------------------------------------------------------------

    def request_session(self, stage: Stage, contact: dict) -> None:
        """Queue session creation unless one is already pending or done."""
        if self.session_requested:
            self.save(stage, contact)
            return
        self.session_requested = True
        self._enqueue(PersistenceJob(CREATE_SESSION, stage, contact))

    def save(self, stage: Stage, fields: dict) -> None:
        """Queue a partial save of already-snapshotted fields."""
        self._enqueue(PersistenceJob(SAVE, stage, fields))

    def _enqueue(self, job: PersistenceJob) -> None:
        self._ensure_worker()
        try:
            self._queue.put_nowait(job)
            logger.debug(f"Queued {job.operation} for {job.stage.value}")
        except asyncio.QueueFull:
            self._record(job, "Persistence queue full; save dropped")
            if job.operation == CREATE_SESSION:
                self.session_requested = False

    def _ensure_worker(self) -> None:
        """Start the worker on the running loop, carrying over pending jobs."""
        loop = asyncio.get_running_loop()
        if self._worker is not None and not self._worker.done() and self._loop is loop:
            return

        pending: list[PersistenceJob] = []
        if self._queue is not None:
            while not self._queue.empty():
                pending.append(self._queue.get_nowait())

        self._queue = asyncio.Queue(maxsize=self.maxsize)
        for job in pending:
            self._queue.put_nowait(job)
        self._loop = loop
        self._worker = loop.create_task(self._run())

    # -------------------------------------------------------------------------
    # Worker
    # -------------------------------------------------------------------------

    async def _run(self) -> None:
        queue = self._queue
        while True:
            job = await queue.get()
            try:
                await self._execute(job)
            except Exception as e:
                logger.warning(f"Persistence {job.operation} failed at {job.stage.value}: {e}")
                self._record(job, str(e))
                if job.operation == CREATE_SESSION:
                    # Let the next pass through consent try again
                    self.session_requested = False
            finally:
                queue.task_done()

    async def _execute(self, job: PersistenceJob) -> None:
        if job.operation == CREATE_SESSION:
            session_id = await self.client.create_session(job.fields)
            self.session_id = session_id
            logger.info(f"Quiz session created: {session_id}")
            if self.on_session:
                self.on_session(session_id)
            return

        if not self.session_id:
            raise PersistenceError("No session id yet; partial save skipped")
        await self.client.save(self.session_id, job.fields)

    def _record(self, job: PersistenceJob, error: str) -> None:
        self.warnings.append(PersistenceWarning(stage=job.stage, operation=job.operation, error=error))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    async def drain(self) -> None:
        """Wait until every queued job has run."""
        if self._queue is None:
            return
        self._ensure_worker()
        await self._queue.join()

    def stop(self) -> None:
        """Cancel the worker; jobs still queued are dropped."""
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
        self._worker = None

    async def close(self) -> None:
        await self.drain()
        self.stop()
