"""
Four-state wrappers for values fetched from (``Loadable``) or sent to
(``Uploadable``) the server.

A value is always in exactly one of::

    UNLOADED -> LOADING(handle) -> LOADED(value)
                                -> FAILED(message or None)

The handle is the in-flight ``asyncio.Task``. It is owned by the wrapper and
cannot be shared, so copying a LOADING wrapper yields UNLOADED.
"""

from __future__ import annotations

import enum
import html
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

EMPTY = ""
REQUEST_FAILED = "Request Failed"


class LoadState(str, enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def loading_icon(diameter: int) -> str:
    return (
        f'<div class="loading-fidget" '
        f'style="width:{diameter}px;height:{diameter}px"></div>'
    )


def failed_view(message: Optional[str]) -> str:
    text = REQUEST_FAILED if message is None else message
    return f'<div class="flexbox-center">{html.escape(text)}</div>'


class Loadable(Generic[T]):
    """A value being fetched from the server."""

    _LOADING_TEXT = "Loading..."

    __slots__ = ("state", "value", "handle", "message")

    def __init__(
        self,
        state: LoadState = LoadState.UNLOADED,
        value: Optional[T] = None,
        handle: Any = None,
        message: Optional[str] = None,
    ):
        self.state = state
        self.value = value
        self.handle = handle
        self.message = message

    # -- constructors -----------------------------------------------------

    @classmethod
    def unloaded(cls) -> "Loadable[T]":
        return cls()

    @classmethod
    def loading(cls, handle: Any) -> "Loadable[T]":
        return cls(LoadState.LOADING, handle=handle)

    @classmethod
    def loaded(cls, value: T) -> "Loadable[T]":
        return cls(LoadState.LOADED, value=value)

    @classmethod
    def failed(cls, message: Optional[str] = None) -> "Loadable[T]":
        return cls(LoadState.FAILED, message=message)

    # -- transitions ------------------------------------------------------

    def with_handle(self, handle: Any) -> "Loadable[T]":
        """Replace the current state with LOADING(handle).

        An earlier in-flight request is not cancelled; whichever completion
        is processed last decides the final state.
        """
        return type(self).loading(handle)

    @property
    def is_unloaded(self) -> bool:
        return self.state is LoadState.UNLOADED

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.state is LoadState.LOADED

    @property
    def is_failed(self) -> bool:
        return self.state is LoadState.FAILED

    def value_or(self, default: T) -> T:
        return self.value if self.is_loaded else default

    # -- copying and comparison -------------------------------------------

    def clone(self) -> "Loadable[T]":
        if self.is_loading:
            return type(self).unloaded()
        return type(self)(self.state, value=self.value, message=self.message)

    __copy__ = clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Loadable) or type(other) is not type(self):
            return NotImplemented
        if self.state is not other.state:
            return False
        if self.is_loaded:
            return self.value == other.value
        if self.is_failed:
            return self.message == other.message
        return True

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        if self.is_loaded:
            return f"{type(self).__name__}.loaded({self.value!r})"
        if self.is_failed:
            return f"{type(self).__name__}.failed({self.message!r})"
        return f"{type(self).__name__}.{self.state.value}"

    # -- rendering --------------------------------------------------------

    def custom_view(
        self,
        loaded_fn: Callable[[T], str],
        loading: str,
        failed_fn: Callable[[Optional[str]], str],
    ) -> str:
        if self.is_loading:
            return loading
        if self.is_loaded:
            return loaded_fn(self.value)
        if self.is_failed:
            return failed_fn(self.message)
        return EMPTY

    def default_view(self, render: Callable[[T], str]) -> str:
        """Uses a 100x100 icon while loading. Suits medium and large views."""
        return self.custom_view(render, loading_icon(100), failed_view)

    def small_view(self, render: Callable[[T], str]) -> str:
        """Uses text placeholders, so it fits anywhere."""
        return self.custom_view(
            render, f'<span class="loading-text">{self._LOADING_TEXT}</span>', failed_view
        )


class Uploadable(Loadable[T]):
    """A value being sent to the server; same contract, different placeholder."""

    _LOADING_TEXT = "Uploading..."

    __slots__ = ()

    def default_view(self, render: Callable[[T], str]) -> str:
        return self.custom_view(
            render, f'<div class="uploading">{self._LOADING_TEXT}</div>', failed_view
        )
