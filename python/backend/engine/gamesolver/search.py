"""Bounded-depth tree search over a pool of worker threads."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from typing import Protocol

from loguru import logger

log = logger.bind(component="search")


class Searchable(Protocol):
    def expand(self, emit: Callable[[Searchable], None]) -> None: ...

    def is_goal(self) -> bool: ...

    def score(self) -> int: ...


class SearchError(RuntimeError):
    """A worker failed while expanding a node."""


class ParallelSearch:
    """Explore a search tree with ``pool_size`` threads.

    Goal nodes are collected until ``search_limit`` of them are found; nodes
    deeper than ``search_depth`` are never expanded. Goals are not expanded
    further.
    """

    def __init__(self, pool_size: int, search_depth: int, search_limit: int) -> None:
        if pool_size < 1:
            raise ValueError(f"Pool size must be positive, got {pool_size}.")
        if search_depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {search_depth}.")
        if search_limit < 1:
            raise ValueError(f"Search limit must be positive, got {search_limit}.")
        self.pool_size = pool_size
        self.search_depth = search_depth
        self.search_limit = search_limit

        self._queue: queue.LifoQueue[tuple[Searchable, int] | None] = queue.LifoQueue()
        self._lock = threading.Lock()
        self._found: list[Searchable] = []
        self._error: BaseException | None = None
        self._expanded = 0
        self._stopped = threading.Event()

    # -- public API -----------------------------------------------------------

    def run(self, root: Searchable) -> list[Searchable]:
        """Search from *root*; return goals, best score first.

        An empty list means nothing was found within the depth budget.
        """
        self._reset()
        log.info(
            "Searching with {} workers, depth {}, limit {}",
            self.pool_size, self.search_depth, self.search_limit,
        )
        self._queue.put((root, 0))
        workers = [
            threading.Thread(target=self._work, name=f"search-{i}", daemon=True)
            for i in range(self.pool_size)
        ]
        for w in workers:
            w.start()

        self._queue.join()
        # One stop marker per worker; the queue is empty once join returns.
        for _ in workers:
            self._queue.put(None)
        for w in workers:
            w.join()

        if self._error is not None:
            raise SearchError(f"Search worker failed: {self._error}") from self._error

        log.info(
            "Search finished: {} expanded, {} found{}",
            self._expanded, len(self._found),
            " (limit reached)" if self._stopped.is_set() else "",
        )
        return sorted(self._found, key=lambda n: n.score(), reverse=True)

    # -- workers --------------------------------------------------------------

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                self._queue.task_done()
                return
            node, depth = item
            try:
                if not self._stopped.is_set():
                    self._visit(node, depth)
            except Exception as exc:
                with self._lock:
                    if self._error is None:
                        self._error = exc
                self._stopped.set()
            finally:
                self._queue.task_done()

    def _visit(self, node: Searchable, depth: int) -> None:
        if node.is_goal():
            self._record(node)
            return
        if depth >= self.search_depth:
            return
        children: list[Searchable] = []
        node.expand(children.append)
        # Children are queued only after a full expansion so a failing
        # expansion leaves nothing half-done behind.
        for child in children:
            self._queue.put((child, depth + 1))
        with self._lock:
            self._expanded += 1

    def _record(self, node: Searchable) -> None:
        with self._lock:
            if len(self._found) >= self.search_limit:
                return
            self._found.append(node)
            log.debug("Goal found with score {}", node.score())
            if len(self._found) >= self.search_limit:
                self._stopped.set()

    def _reset(self) -> None:
        self._found = []
        self._error = None
        self._expanded = 0
        self._stopped.clear()
