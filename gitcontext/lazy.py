"""
Single-computation async values.

AsyncLazy runs its factory at most once. It moves through three states:

    Uncomputed -> InProgress(task) -> Done(outcome)

Concurrent callers that arrive while the task runs await the same task.
Failures are captured into the Outcome instead of being re-raised by the
state machine, so every caller sees the same settled result and the
strict/lenient decision is left to whoever consumes the outcome.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, Tuple, Type, TypeVar

from .errors import GitContextError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Failures that describe repository state. Anything else is a bug and propagates.
CAPTURED_ERRORS: Tuple[Type[BaseException], ...] = (GitContextError, OSError)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Settled result of an AsyncLazy: either a value or the error that prevented it."""
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> 'Outcome[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> 'Outcome[T]':
        return cls(error=error)


class AsyncLazy(Generic[T]):
    """
    Memoized async computation.

    Example:
        head = AsyncLazy(lambda: resolve_head(git_dir), name="head")
        outcome = await head.get()
        if outcome.ok:
            print(outcome.value.branch)

    Attributes:
        name: Label used in log messages
        computations: How many times the factory has been started. This is 0
            or 1 unless a run was cancelled before it settled, for example by
            its event loop shutting down, in which case the next get() starts over.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]], name: str = "value"):
        self._factory = factory
        self.name = name
        self.computations = 0
        self._task: Optional[asyncio.Future] = None
        self._outcome: Optional[Outcome[T]] = None

    @property
    def state(self) -> str:
        if self._outcome is not None:
            return "done"
        if self._task is not None:
            return "in_progress"
        return "uncomputed"

    async def _run(self) -> Outcome[T]:
        try:
            outcome = Outcome.success(await self._factory())
        except CAPTURED_ERRORS as e:
            logger.debug(f"Computing {self.name} failed: {e}")
            outcome = Outcome.failure(e)
        self._outcome = outcome
        return outcome

    def _task_is_stale(self) -> bool:
        """True if the running task was cancelled or its event loop has closed."""
        if self._task.done():
            return self._task.cancelled()
        return self._task.get_loop().is_closed()

    async def get(self) -> Outcome[T]:
        """Start the computation if needed and return its outcome."""
        if self._outcome is not None:
            return self._outcome

        if self._task is None or self._task_is_stale():
            self.computations += 1
            self._task = asyncio.ensure_future(self._run())

        return await asyncio.shield(self._task)

    def __repr__(self) -> str:
        return f"AsyncLazy({self.name!r}, state={self.state!r})"
