"""
Reducer runtime driving the components.

A component is a plain object with three functions::

    init(props)         -> (state, effects)
    update(state, msg)  -> (state, effects)
    view(state)         -> str

The runtime owns a queue of messages and processes them one at a time on a
single asyncio loop; ``update`` always runs to completion before the next
message is looked at. Side effects are described by the values below and
carried out by the runtime, never by the component.

For a ``Fetch`` the runtime starts a task, parks it in the named Loadable
slot of the state (which becomes LOADING) and, when the task completes,
enqueues ``on_success(data)`` or ``on_failure(message)``; a payload that
``on_success`` cannot convert is treated as a failure. Tasks are never
cancelled: if a slot is fetched twice, both completions are delivered and
the one processed last wins.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Protocol, Set, Tuple

import structlog

from .api import ApiClient, ApiRequest
from .loadable import Loadable

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Fetch:
    slot: str
    request: ApiRequest
    on_success: Callable[[Any], Any]
    on_failure: Callable[[Optional[str]], Any]


@dataclass(frozen=True)
class SetCredential:
    token: Optional[str]


@dataclass(frozen=True)
class Emit:
    callback: Callable[[Any], None]
    value: Any = None


Effect = Fetch | SetCredential | Emit
Effects = List[Effect]


class Component(Protocol):
    def init(self, props: Any) -> Tuple[Any, Effects]: ...

    def update(self, state: Any, msg: Any) -> Tuple[Any, Effects]: ...

    def view(self, state: Any) -> str: ...


# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------

class Runtime:
    """Runs one component against an ``ApiClient``."""

    def __init__(self, component: Component, client: ApiClient, props: Any = None):
        self.component = component
        self.client = client
        self.props = props
        self.state: Any = None
        self.queue: asyncio.Queue = asyncio.Queue()
        self._pending: Set[asyncio.Task] = set()

    def start(self) -> None:
        """Build the initial state. Must be called from inside the running loop."""
        self.state, effects = self.component.init(self.props)
        self._apply(effects)

    def dispatch(self, msg: Any) -> None:
        self.queue.put_nowait(msg)

    def view(self) -> str:
        return self.component.view(self.state)

    @property
    def in_flight(self) -> int:
        return sum(1 for task in self._pending if not task.done())

    def process(self, msg: Any) -> None:
        self.state, effects = self.component.update(self.state, msg)
        self._apply(effects)

    async def run_until_idle(self) -> None:
        """Process messages until the queue is empty and no request is in flight."""
        while True:
            while not self.queue.empty():
                self.process(self.queue.get_nowait())

            self._reap()
            if not self._pending:
                if self.queue.empty():
                    return
                continue
            await asyncio.wait(set(self._pending), return_when=asyncio.FIRST_COMPLETED)

    # -- internals --------------------------------------------------------

    def _reap(self) -> None:
        done = {task for task in self._pending if task.done()}
        self._pending -= done
        for task in done:
            # Only failures raised by on_failure itself reach this point
            task.result()

    def _apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, Fetch):
                self._start_fetch(effect)
            elif isinstance(effect, SetCredential):
                self.client.set_credential(effect.token)
            elif isinstance(effect, Emit):
                effect.callback(effect.value)
            else:
                raise TypeError(f"Unknown effect: {effect!r}")

    def _start_fetch(self, effect: Fetch) -> None:
        current = getattr(self.state, effect.slot)
        if not isinstance(current, Loadable):
            raise TypeError(f"State slot {effect.slot!r} is not a Loadable")
        task = asyncio.create_task(self._perform(effect))
        self._pending.add(task)
        setattr(self.state, effect.slot, current.with_handle(task))

    async def _perform(self, effect: Fetch) -> None:
        response = await self.client.send(effect.request)
        if response.ok:
            try:
                msg = effect.on_success(response.data)
            except (ValueError, KeyError, TypeError) as exc:
                # Payload did not match what the component expects
                log.warning("runtime.unexpected_payload", slot=effect.slot, error=str(exc))
                msg = effect.on_failure(str(exc))
        else:
            log.info("runtime.fetch_failed", slot=effect.slot, error=response.error)
            msg = effect.on_failure(response.error)
        if msg is not None:
            self.queue.put_nowait(msg)
