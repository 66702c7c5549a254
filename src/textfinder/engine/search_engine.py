"""
Search engine facade.

``SearchEngine`` owns the lifecycle of a search: it validates the root, seeds
the frontier, runs a fixed pool of ``SearchWorker`` threads, and delivers all
events to a single listener through one dispatcher thread per search. Events
of consecutive searches on the same engine never overlap either, because each
dispatcher waits for its predecessor before delivering anything.
"""

import os
import threading
import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Union

from .listener import CollectingListener, SearchListener
from .workers import SearchEvent, SearchRun, SearchWorker
from ..errors import EngineDisposedError, SearchInProgressError
from ..models.engine_state import EngineState
from ..models.search_config import SearchConfiguration
from ..models.search_results import SearchSummary
from ..models.settings import EngineSettings


logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Concurrent file content search.

    Usage::

        with SearchEngine(listener) as engine:
            engine.start("~/src", "TODO", extensions=".py,.md")
            engine.wait()

    ``start`` returns immediately. ``stop`` requests cancellation and the search
    still ends with exactly one ``on_complete``. ``dispose`` (or leaving the
    ``with`` block) stops the search, joins every thread, and guarantees that no
    event is delivered afterwards.
    """

    def __init__(self, listener: Optional[SearchListener] = None,
                 settings: Optional[EngineSettings] = None):
        """
        Initialize the engine.

        Args:
            listener: Receiver of search events (a no-op listener if None)
            settings: Engine settings (defaults if None)
        """
        self.listener = listener or SearchListener()
        self.settings = settings or EngineSettings()
        self._lock = threading.RLock()
        self._state = EngineState.IDLE
        self._run: Optional[SearchRun] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._dispatcher: Optional[threading.Thread] = None
        self._disposed = False

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def configuration(self) -> Optional[SearchConfiguration]:
        """Configuration of the current or most recent search."""
        run = self._run
        return run.configuration if run else None

    @property
    def is_running(self) -> bool:
        return self._state in (EngineState.RUNNING, EngineState.STOPPING)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def start(self, root_path: str, target_text: str, *, recursive: bool = True,
              include_hidden: bool = False, extensions: Union[str, Iterable[str], None] = None,
              case_sensitive: Optional[bool] = None) -> None:
        """
        Start searching ``root_path`` for ``target_text`` without blocking.

        Every option after ``target_text`` is keyword-only.

        Args:
            root_path: Directory to search
            target_text: Literal text to find
            recursive: Whether to descend into subdirectories
            include_hidden: Whether hidden entries are searched
            extensions: Allowed extensions (comma-separated string or iterable);
                settings.default_extensions when None
            case_sensitive: Match case exactly; settings.case_sensitive when None

        Raises:
            pydantic.ValidationError: If the parameters are invalid (e.g. empty text)
            SearchInProgressError: If a search is already running
            EngineDisposedError: If the engine has been disposed
        """
        configuration = SearchConfiguration(
            root_path=root_path,
            target_text=target_text,
            recursive=recursive,
            include_hidden=include_hidden,
            extensions=self.settings.default_extensions if extensions is None else extensions,
            case_sensitive=self.settings.case_sensitive if case_sensitive is None else case_sensitive,
        )
        self.start_search(configuration)

    def start_search(self, configuration: SearchConfiguration) -> None:
        """
        Start a search described by ``configuration`` without blocking.

        A root that is missing or not a directory is reported through
        ``on_error`` followed by ``on_complete``; no workers are started and the
        engine is left COMPLETED.
        """
        with self._lock:
            if self._disposed:
                raise EngineDisposedError("Cannot start a search on a disposed engine")
            if self.is_running:
                raise SearchInProgressError("A search is already running")

            if self._executor is not None:
                # the previous run has completed, so its threads are already exiting
                self._executor.shutdown(wait=True)
                self._executor = None

            run = SearchRun(configuration, self.settings)
            previous = self._dispatcher
            self._run = run
            self._dispatcher = threading.Thread(
                target=self._dispatch, args=(run, previous),
                name="textfinder-dispatch", daemon=True,
            )

            root = configuration.root_path
            if not os.path.isdir(root):
                reason = "does not exist" if not os.path.exists(root) else "is not a directory"
                logger.error(f"Search root {reason}: {root}")
                run.report_error(f"Search root {reason}: {root}")
                run.post(SearchEvent.COMPLETE)
                self._state = EngineState.COMPLETED
                self._dispatcher.start()
                return

            worker_count = self.settings.get_worker_count()
            run.seed(root, worker_count)
            self._state = EngineState.RUNNING
            logger.info(f"Starting search with {worker_count} workers: {configuration}")

            self._dispatcher.start()
            self._executor = ThreadPoolExecutor(max_workers=worker_count,
                                                thread_name_prefix="textfinder-worker")
            for _ in range(worker_count):
                self._executor.submit(SearchWorker(run))
            # Threads exit once their loops end; dispose() joins them.
            self._executor.shutdown(wait=False)

    def stop(self) -> None:
        """Request cancellation. Idempotent and safe in any state."""
        with self._lock:
            if self._state is not EngineState.RUNNING:
                return
            self._state = EngineState.STOPPING
            run = self._run
        logger.info("Stopping search")
        run.cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the current search has delivered its completion event.

        Returns:
            True if completed, False if the timeout expired first
        """
        run = self._run
        if run is None:
            return True
        return run.completed.wait(timeout)

    def dispose(self) -> None:
        """
        Stop the search and release every thread.

        When called from inside a listener callback the remaining events of the
        search are dropped instead of delivered, since the dispatcher cannot
        wait for itself.
        """
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            run = self._run
            executor = self._executor
            dispatcher = self._dispatcher
            if self._state is EngineState.RUNNING:
                self._state = EngineState.STOPPING

        if run is None:
            return

        run.cancel()
        if executor is not None:
            executor.shutdown(wait=True)

        if dispatcher is threading.current_thread():
            run.muted = True
        elif dispatcher is not None:
            dispatcher.join()
        logger.debug("Search engine disposed")

    def __enter__(self) -> 'SearchEngine':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def _dispatch(self, run: SearchRun, previous: Optional[threading.Thread]) -> None:
        """Deliver the events of one run, in order, on this thread only."""
        if previous is not None:
            previous.join()

        started = time.monotonic()
        while True:
            event, args = run.events.get()
            if event is SearchEvent.COMPLETE:
                with self._lock:
                    if self._run is run:
                        self._state = EngineState.COMPLETED
                logger.info(f"Search complete in {time.monotonic() - started:.2f}s")
                self._deliver(run, event, args)
                run.completed.set()
                return
            self._deliver(run, event, args)

    def _deliver(self, run: SearchRun, event: SearchEvent, args: tuple) -> None:
        if run.muted:
            return
        handler = getattr(self.listener, event.value)
        try:
            handler(*args)
        except Exception:
            logger.exception(f"Listener {event.value} callback failed")


def search(root_path: str, target_text: str, recursive: bool = True,
           include_hidden: bool = False, extensions: Union[str, Iterable[str], None] = None,
           case_sensitive: Optional[bool] = None, settings: Optional[EngineSettings] = None,
           timeout: Optional[float] = None) -> SearchSummary:
    """
    Convenience function to run a search to completion.

    Args:
        root_path: Directory to search
        target_text: Literal text to find
        recursive: Whether to descend into subdirectories
        include_hidden: Whether hidden entries are searched
        extensions: Allowed extensions
        case_sensitive: Match case exactly
        settings: Engine settings (defaults if None)
        timeout: Seconds after which the search is stopped (no limit if None)

    Returns:
        SearchSummary with every result, error, and counter of the search
    """
    listener = CollectingListener()
    with SearchEngine(listener, settings) as engine:
        engine.start(root_path, target_text, recursive=recursive, include_hidden=include_hidden,
                     extensions=extensions, case_sensitive=case_sensitive)
        listener.summary.configuration = engine.configuration
        if not engine.wait(timeout):
            engine.stop()
            listener.summary.cancelled = True
            engine.wait()
    return listener.summary
