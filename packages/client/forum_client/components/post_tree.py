"""A post and its replies, rendered as nested blocks."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Optional, Tuple

from forum_shared.identifiers import PostUuid

from .. import api
from ..datatypes import PostData
from ..loadable import Loadable
from ..runtime import Effects, Fetch


@dataclass
class Props:
    post_id: PostUuid


@dataclass
class State:
    post_id: PostUuid
    post: Loadable[PostData] = field(default_factory=Loadable.unloaded)


# Messages

@dataclass(frozen=True)
class Reload:
    pass


@dataclass(frozen=True)
class PostLoaded:
    post: PostData


@dataclass(frozen=True)
class PostFailed:
    message: Optional[str] = None


def _fetch_post(post_id: PostUuid) -> Fetch:
    return Fetch(
        slot="post",
        request=api.get_post(post_id),
        on_success=lambda data: PostLoaded(PostData.from_response(data)),
        on_failure=PostFailed,
    )


def _render_post(post: PostData) -> str:
    classes = "post censored" if post.censored else "post"
    edited = ' <span class="post-edited">(edited)</span>' if post.modified_date else ""
    replies = "".join(_render_post(child) for child in post.children)
    return (
        f'<div class="{classes}">'
        f'<div class="post-author">{html.escape(post.author.display_name)}{edited}</div>'
        f'<div class="post-content">{html.escape(post.content)}</div>'
        f'<div class="post-replies">{replies}</div>'
        "</div>"
    )


class PostTreeComponent:
    def init(self, props: Props) -> Tuple[State, Effects]:
        state = State(post_id=props.post_id)
        return state, [_fetch_post(state.post_id)]

    def update(self, state: State, msg) -> Tuple[State, Effects]:
        if isinstance(msg, Reload):
            return state, [_fetch_post(state.post_id)]

        if isinstance(msg, PostLoaded):
            state.post = Loadable.loaded(msg.post)
            return state, []

        if isinstance(msg, PostFailed):
            state.post = Loadable.failed(msg.message)
            return state, []

        raise TypeError(f"PostTree cannot handle {msg!r}")

    def view(self, state: State) -> str:
        return f'<div class="post-tree">{state.post.default_view(_render_post)}</div>'


PostTree = PostTreeComponent()
