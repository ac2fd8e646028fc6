"""
UI execution context.

One dedicated thread owns the toolkit backend. Surface construction is marshalled onto
it with `run()` (the caller blocks until the task finishes); afterwards the same thread
pumps input and ticks every attached window, so world state is only ever touched here.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from config import FPS

from .backends.base import Backend
from .errors import MarshalError

if TYPE_CHECKING:
    from .engine import Window

logger = logging.getLogger(__name__)

# How long the idle loop waits for a task before re-checking `running`.
_IDLE_POLL_SEC = 0.1


class _Job:
    def __init__(self, task: Callable[[], Any], detached: bool = False):
        self.task = task
        self.detached = detached
        self.done = threading.Event()
        self.cancelled = False
        self.result: Any = None
        self.error: Optional[BaseException] = None


class UIContext:
    """
    Owns the UI thread.

    - run(task, timeout) -> result   (marshal-and-wait)
    - post(task)                     (fire-and-forget)
    - attach(window) / detach(window) (UI thread only)
    """

    def __init__(self, backend: Backend, fps: int = FPS):
        self.backend = backend
        self.fps = int(fps)
        self.running = False
        # Guards `running` together with queueing, so no job lands after shutdown drained the queue.
        self._state_lock = threading.Lock()
        self._tasks: "queue.Queue[Optional[_Job]]" = queue.Queue()
        self._windows: List["Window"] = []
        self._thread: Optional[threading.Thread] = None

    @property
    def windows(self) -> List["Window"]:
        return list(self._windows)

    def start(self) -> None:
        """Start the UI thread."""
        with self._state_lock:
            if self.running:
                return
            self.running = True
            self._thread = threading.Thread(target=self._loop, name="playfield-ui", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        """Stop the UI thread; open windows are closed and pending tasks fail."""
        with self._state_lock:
            if not self.running:
                return
            self.running = False
            self._tasks.put(None)
        if self._thread is not None and not self.is_ui_thread():
            self._thread.join(timeout=timeout)

    def is_ui_thread(self) -> bool:
        return self._thread is not None and threading.current_thread() is self._thread

    def run(self, task: Callable[[], Any], timeout: Optional[float] = None) -> Any:
        """Run `task` on the UI thread and block until it completes."""
        if self.is_ui_thread():
            try:
                return task()
            except Exception as exc:
                raise MarshalError(f"UI task failed: {exc}") from exc

        job = _Job(task)
        self._enqueue(job)
        if not job.done.wait(timeout):
            job.cancelled = True
            raise MarshalError(f"UI task did not finish within {timeout}s")
        if job.error is not None:
            raise MarshalError(f"UI task failed: {job.error}") from job.error
        return job.result

    def post(self, task: Callable[[], Any]) -> None:
        """Queue `task` for the UI thread without waiting."""
        self._enqueue(_Job(task, detached=True))

    def _enqueue(self, job: _Job) -> None:
        with self._state_lock:
            if not self.running:
                raise MarshalError("UI context is not running")
            self._tasks.put(job)

    def attach(self, window: "Window") -> None:
        if window not in self._windows:
            self._windows.append(window)

    def detach(self, window: "Window") -> None:
        if window in self._windows:
            self._windows.remove(window)

    # ---- loop ----

    def _execute(self, job: _Job) -> None:
        if job.cancelled:
            return
        try:
            job.result = job.task()
        except Exception as exc:
            if job.detached:
                # nobody waits on a posted task
                logger.exception("UI task failed")
            job.error = exc
        finally:
            job.done.set()

    def _drain_tasks(self, block: bool) -> None:
        try:
            job = self._tasks.get(timeout=_IDLE_POLL_SEC) if block else self._tasks.get_nowait()
        except queue.Empty:
            return
        while True:
            if job is not None:
                self._execute(job)
            try:
                job = self._tasks.get_nowait()
            except queue.Empty:
                return

    def _loop(self) -> None:
        logger.debug("UI thread started (backend=%s)", type(self.backend).__name__)
        try:
            while self.running:
                self._drain_tasks(block=not self._windows)
                if not self._windows:
                    continue
                for window in list(self._windows):
                    window.pump()
                self.backend.wait_frame(self.fps)
        except Exception as exc:
            logger.exception("UI thread crashed")
            for window in self._windows:
                if window.error is None:
                    window.error = exc
        finally:
            with self._state_lock:
                self.running = False
            for window in list(self._windows):
                window.close()
            self._fail_pending()
            self.backend.shutdown()
            logger.debug("UI thread stopped")

    def _fail_pending(self) -> None:
        while True:
            try:
                job = self._tasks.get_nowait()
            except queue.Empty:
                return
            if job is not None and not job.done.is_set():
                job.error = MarshalError("UI context stopped")
                job.done.set()


_CONTEXT: Optional[UIContext] = None
_CONTEXT_LOCK = threading.Lock()


def get_ui_context(backend: Optional[Backend] = None) -> UIContext:
    """
    Return the process-wide UI context, starting it on first use.

    `backend` is only used when a new context is created (default: pygame).
    """
    global _CONTEXT
    with _CONTEXT_LOCK:
        if _CONTEXT is None or not _CONTEXT.running:
            if backend is None:
                from .backends.pygame_backend import PygameBackend

                backend = PygameBackend()
            _CONTEXT = UIContext(backend)
            _CONTEXT.start()
        return _CONTEXT


def shutdown(timeout: float = 2.0) -> None:
    """Stop the process-wide UI context, if any."""
    global _CONTEXT
    with _CONTEXT_LOCK:
        ctx, _CONTEXT = _CONTEXT, None
    if ctx is not None:
        ctx.stop(timeout=timeout)
