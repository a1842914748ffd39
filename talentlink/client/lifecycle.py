"""
View lifecycle for async fetches.

A view (a dashboard panel, say) starts fetches and commits their results
into its own state. Once the view is closed, any response that arrives
late is dropped instead of being written into a view nobody is showing.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class CancelToken:
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ViewScope:
    """
    Owns a CancelToken and the tasks started through it.

    Usage:
        scope = ViewScope()
        scope.spawn(client.get_mentor_requirements(), on_result=view.show)
        ...
        scope.close()   # pending tasks cancelled, late results discarded
    """

    def __init__(self) -> None:
        self.token = CancelToken()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def closed(self) -> bool:
        return self.token.cancelled

    def spawn(
        self,
        fetch: Awaitable[Any],
        on_result: Callable[[Any], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> Optional[asyncio.Task]:
        """Run fetch as a task; commit through on_result only while the scope is open."""
        if self.closed:
            if asyncio.iscoroutine(fetch):
                fetch.close()
            return None

        async def run() -> None:
            try:
                result = await fetch
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                if self.closed:
                    logger.debug("Dropped error from closed view: %s", exc)
                elif on_error is not None:
                    on_error(exc)
                else:
                    logger.warning("View fetch failed: %s", exc)
                return
            if not self.closed:
                on_result(result)

        task = asyncio.ensure_future(run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self) -> None:
        self.token.cancel()
        for task in list(self._tasks):
            task.cancel()

    async def wait(self) -> None:
        """Wait for pending tasks (cancelled ones included) to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def __aenter__(self) -> "ViewScope":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


class RequirementsView:
    """
    Mentor dashboard panel showing what is still needed to be listed.

    State: loading, error, requirements, message.

    Only the latest refresh may commit: starting a new one cancels the
    previous fetch, and results tagged with an older generation are dropped.
    """

    def __init__(self, client, scope: Optional[ViewScope] = None):
        self._client = client
        self._scope = scope or ViewScope()
        self._generation = 0
        self._current: Optional[asyncio.Task] = None
        self.loading = False
        self.error: Optional[str] = None
        self.requirements: Optional[dict] = None
        self.message: Optional[dict] = None

    def refresh(self) -> Optional[asyncio.Task]:
        if self._scope.closed:
            return None
        if self._current is not None and not self._current.done():
            self._current.cancel()

        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None
        self._current = self._scope.spawn(
            self._client.get_mentor_requirements(),
            lambda data: self._on_result(generation, data),
            lambda exc: self._on_error(generation, exc),
        )
        return self._current

    def _on_result(self, generation: int, data: dict) -> None:
        if generation != self._generation:
            return
        self.requirements = data["requirements"]
        self.message = data.get("message")
        self.loading = False

    def _on_error(self, generation: int, exc: Exception) -> None:
        if generation != self._generation:
            return
        self.error = str(exc)
        self.loading = False

    def close(self) -> None:
        self._scope.close()
