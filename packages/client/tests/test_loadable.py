"""Tests for the Loadable / Uploadable state machine and its views."""

import asyncio
import copy

from forum_client.loadable import (
    LoadState,
    Loadable,
    Uploadable,
    failed_view,
    loading_icon,
)


def test_default_is_unloaded():
    value = Loadable()
    assert value.state is LoadState.UNLOADED
    assert value.is_unloaded
    assert value.value is None


async def test_with_handle_moves_to_loading_and_keeps_type():
    task = asyncio.create_task(asyncio.sleep(0))
    loading = Uploadable.loaded(1).with_handle(task)
    assert isinstance(loading, Uploadable)
    assert loading.is_loading
    assert loading.handle is task
    await task


def test_clone_of_loading_is_unloaded():
    loading = Loadable.loading(handle=object())
    cloned = loading.clone()
    assert cloned.is_unloaded
    assert cloned.handle is None
    assert copy.copy(loading).is_unloaded


def test_clone_keeps_loaded_and_failed():
    assert Loadable.loaded([1, 2]).clone() == Loadable.loaded([1, 2])
    assert Loadable.failed("nope").clone() == Loadable.failed("nope")


def test_equality():
    assert Loadable.loaded(3) == Loadable.loaded(3)
    assert Loadable.loaded(3) != Loadable.loaded(4)
    assert Loadable.failed("a") != Loadable.failed("b")
    assert Loadable.failed() == Loadable.failed(None)
    assert Loadable.loading(object()) == Loadable.loading(object())
    assert Loadable.loaded(3) != Uploadable.loaded(3)


def test_value_or():
    assert Loadable.loaded(False).value_or(True) is False
    assert Loadable.failed("x").value_or(7) == 7
    assert Loadable().value_or("fallback") == "fallback"


def test_default_view_per_state():
    render = lambda v: f"<p>{v}</p>"
    assert Loadable().default_view(render) == ""
    assert Loadable.loading(object()).default_view(render) == loading_icon(100)
    assert Loadable.loaded("hi").default_view(render) == "<p>hi</p>"
    assert Loadable.failed("boom").default_view(render) == '<div class="flexbox-center">boom</div>'


def test_failed_without_message_uses_generic_text():
    assert failed_view(None) == '<div class="flexbox-center">Request Failed</div>'
    assert Loadable.failed().small_view(str) == failed_view(None)


def test_failed_message_is_escaped():
    assert "&lt;script&gt;" in failed_view("<script>")


def test_small_view_uses_text_placeholder():
    view = Loadable.loading(object()).small_view(str)
    assert view == '<span class="loading-text">Loading...</span>'


def test_uploadable_placeholders():
    uploading = Uploadable.loading(object())
    assert uploading.default_view(str) == '<div class="uploading">Uploading...</div>'
    assert uploading.small_view(str) == '<span class="loading-text">Uploading...</span>'


def test_custom_view():
    view = Loadable.failed("x").custom_view(str, "wait", lambda m: f"failed:{m}")
    assert view == "failed:x"
    assert Loadable.loading(object()).custom_view(str, "wait", str) == "wait"


def test_repr():
    assert repr(Loadable.loaded(1)) == "Loadable.loaded(1)"
    assert repr(Uploadable.failed("e")) == "Uploadable.failed('e')"
    assert repr(Loadable()) == "Loadable.unloaded"
