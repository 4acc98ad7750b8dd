"""
Request lifecycle state machine.

Every API call walks the same path:

    BUILDING -> AWAITING_TOKEN -> AWAITING_RESPONSE -> SYNCHRONIZING -> DONE

and may drop into FAILED from any non-terminal state. There is no retry
loop; DONE and FAILED are terminal.

Observers can hook into state entries for instrumentation; hooks never
influence the outcome of a request.
"""

import asyncio
import inspect
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, List, Optional, Tuple

from ..utils import logger
from .exceptions import InvalidTransition


class RequestState(str, Enum):
    BUILDING = "building"
    AWAITING_TOKEN = "awaiting_token"
    AWAITING_RESPONSE = "awaiting_response"
    SYNCHRONIZING = "synchronizing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestState.DONE, RequestState.FAILED)


_TRANSITIONS: Dict[RequestState, FrozenSet[RequestState]] = {
    RequestState.BUILDING: frozenset({RequestState.AWAITING_TOKEN, RequestState.FAILED}),
    RequestState.AWAITING_TOKEN: frozenset({RequestState.AWAITING_RESPONSE, RequestState.FAILED}),
    RequestState.AWAITING_RESPONSE: frozenset({RequestState.SYNCHRONIZING, RequestState.FAILED}),
    RequestState.SYNCHRONIZING: frozenset({RequestState.DONE, RequestState.FAILED}),
    RequestState.DONE: frozenset(),
    RequestState.FAILED: frozenset(),
}


# ==================== Transition Hooks ====================

TransitionHookFunc = Callable[["RequestLifecycle", Optional[RequestState]], Awaitable[None]]


class TransitionHooks:
    """Registry of async observers called when a lifecycle enters a state."""

    def __init__(self) -> None:
        self._hooks: Dict[RequestState, List[TransitionHookFunc]] = {}

    def hook(self, state: RequestState, hook_func: TransitionHookFunc) -> None:
        """
        Register a hook for entries into ``state``.

        Args:
            state: State to observe
            hook_func: ``async def hook(lifecycle, previous_state)``

        Raises:
            TypeError: If hook_func is not a coroutine function
        """
        if not inspect.iscoroutinefunction(hook_func):
            raise TypeError(f"Hook must be a coroutine function, got {type(hook_func).__name__}")

        self._hooks.setdefault(RequestState(state), []).append(hook_func)

    async def dispatch(self, lifecycle: "RequestLifecycle", previous: Optional[RequestState]) -> None:
        hooks = self._hooks.get(lifecycle.state, [])
        if not hooks:
            return
        results = await asyncio.gather(
            *(hook(lifecycle, previous) for hook in hooks),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error("Transition hook for %s failed: %r", lifecycle.state.value, result)

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())


# ==================== Lifecycle ====================

class RequestLifecycle:
    """Tracks the state of a single API call.

    Attributes:
        operation: Operation name of the call
        history: Every state entered, in order
    """

    def __init__(self, operation: str, hooks: Optional[TransitionHooks] = None) -> None:
        self.operation = operation
        self._hooks = hooks
        self._state = RequestState.BUILDING
        self.history: List[RequestState] = [RequestState.BUILDING]

    @property
    def state(self) -> RequestState:
        return self._state

    def can_advance(self, target: RequestState) -> bool:
        return target in _TRANSITIONS[self._state]

    async def advance(self, target: RequestState) -> None:
        """
        Move to ``target`` and notify hooks.

        Raises:
            InvalidTransition: If ``target`` is not reachable from the current state
        """
        target = RequestState(target)
        if not self.can_advance(target):
            raise InvalidTransition(self._state, target)

        previous, self._state = self._state, target
        self.history.append(target)
        if self._hooks is not None:
            await self._hooks.dispatch(self, previous)

    def transitions(self) -> List[Tuple[RequestState, RequestState]]:
        return list(zip(self.history, self.history[1:]))

    def __repr__(self) -> str:
        return f"RequestLifecycle(operation={self.operation!r}, state={self._state.value})"
