"""
Shared Model Loader
===================

Process-wide, lazily loaded model handles with a load-once contract.

The first caller that needs a model starts its load on a background
thread; every other caller, concurrent or later, awaits the same load.
A successful load is reused until process exit or an explicit reset.
A failed load is remembered as well, so a broken model is not retried
on every request; ``reset_models()`` clears both outcomes.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional
import asyncio
import logging
import threading
import time

from datelens_core.exceptions import ModelUnavailableError


logger = logging.getLogger(__name__)


class SharedModel:
    """
    Load-once handle around a model factory.

    Example:
        >>> handle = SharedModel("face", lambda: YOLO("yolov8n-face.pt"))
        >>> model = await handle.get()
    """

    def __init__(self, name: str, factory: Callable[[], Any]):
        """
        Args:
            name: Human-readable model name used in logs and errors
            factory: Blocking callable that builds the model instance
        """
        self.name = name
        self._factory = factory
        self._lock = threading.Lock()
        self._future: Optional[Future] = None
        self.load_count = 0

    @property
    def is_loaded(self) -> bool:
        future = self._future
        return future is not None and future.done() and future.exception() is None

    @property
    def has_failed(self) -> bool:
        future = self._future
        return future is not None and future.done() and future.exception() is not None

    def _start_load(self) -> Future:
        with self._lock:
            if self._future is None:
                future: Future = Future()
                # RUNNING futures cannot be cancelled by an abandoned waiter
                future.set_running_or_notify_cancel()
                self._future = future
                self.load_count += 1
                thread = threading.Thread(
                    target=self._run_load,
                    args=(future,),
                    name=f"model-load-{self.name}",
                    daemon=True,
                )
                thread.start()
            return self._future

    def _run_load(self, future: Future) -> None:
        logger.info(f"Loading model {self.name}")
        start = time.perf_counter()
        try:
            instance = self._factory()
        except Exception as e:
            logger.warning(f"Failed to load model {self.name}: {e}")
            error = ModelUnavailableError(self.name, str(e))
            error.__cause__ = e
            future.set_exception(error)
        else:
            logger.info(f"Model {self.name} loaded in {time.perf_counter() - start:.2f}s")
            future.set_result(instance)

    async def get(self) -> Any:
        """
        Return the model instance, loading it on first use.

        Raises:
            ModelUnavailableError: If the load failed
        """
        return await asyncio.wrap_future(self._start_load())

    def reset(self) -> None:
        """Forget the loaded instance (or failure) so the next get() reloads."""
        with self._lock:
            self._future = None

    def __repr__(self) -> str:
        if self.is_loaded:
            state = "loaded"
        elif self.has_failed:
            state = "failed"
        elif self._future is not None:
            state = "loading"
        else:
            state = "idle"
        return f"SharedModel(name={self.name}, state={state})"


# =============================================================================
# Process-wide registry
# =============================================================================

_registry: Dict[str, SharedModel] = {}
_registry_lock = threading.Lock()


def get_shared_model(key: str, factory: Callable[[], Any]) -> SharedModel:
    """
    Get the process-wide handle for ``key``, creating it on first request.

    The factory of the first caller wins; later factories for the same key
    are ignored.
    """
    with _registry_lock:
        handle = _registry.get(key)
        if handle is None:
            handle = SharedModel(key, factory)
            _registry[key] = handle
        return handle


def reset_models(key: Optional[str] = None) -> None:
    """
    Drop shared model handles so they are loaded again on next use.

    Args:
        key: Handle to drop (all handles when None)
    """
    with _registry_lock:
        if key is None:
            handles = list(_registry.values())
            _registry.clear()
        else:
            handle = _registry.pop(key, None)
            handles = [handle] if handle is not None else []

    for handle in handles:
        handle.reset()
    logger.debug(f"Reset {len(handles)} shared model(s)")
