"""
Participant pane of a bucket.

Shows the approved members of a bucket. Bucket owners additionally get a
"Remove" button per member; a removal is tracked as an ``Uploadable`` and the
member list is fetched again once it settles, whatever the outcome.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import structlog

from forum_shared.identifiers import BucketUuid, UserUuid

from .. import api
from ..datatypes import BucketData, UserData
from ..loadable import Loadable, Uploadable
from ..runtime import Effects, Fetch

log = structlog.get_logger()


@dataclass
class Props:
    bucket: Loadable[BucketData] = field(default_factory=Loadable.unloaded)


@dataclass
class State:
    bucket_id: Optional[BucketUuid] = None
    users: Loadable[List[UserData]] = field(default_factory=Loadable.unloaded)
    is_owner: Loadable[bool] = field(default_factory=Loadable.unloaded)
    remove_action: Uploadable[None] = field(default_factory=Uploadable.unloaded)


# Messages

@dataclass(frozen=True)
class BucketChanged:
    """The surrounding page finished (re)loading the bucket."""
    bucket: Loadable[BucketData]


@dataclass(frozen=True)
class GetBucketUserData:
    bucket_id: BucketUuid


@dataclass(frozen=True)
class BucketUserDataLoaded:
    users: List[UserData]


@dataclass(frozen=True)
class BucketUserDataFailed:
    message: Optional[str] = None


@dataclass(frozen=True)
class SetIsUserOwner:
    is_owner: bool


@dataclass(frozen=True)
class RemoveUserFromBucket:
    user_id: UserUuid


@dataclass(frozen=True)
class RemoveUserFinished:
    error: Optional[str] = None


def _fetch_participants(bucket_id: BucketUuid) -> Fetch:
    return Fetch(
        slot="users",
        request=api.get_users_in_bucket(bucket_id),
        on_success=lambda data: BucketUserDataLoaded([UserData.from_response(u) for u in data]),
        on_failure=BucketUserDataFailed,
    )


def _fetch_is_owner(bucket_id: BucketUuid) -> Fetch:
    # Anonymous visitors and network failures both land on "not an owner"
    return Fetch(
        slot="is_owner",
        request=api.get_is_bucket_owner(bucket_id),
        on_success=lambda data: SetIsUserOwner(bool(data)),
        on_failure=lambda _message: SetIsUserOwner(False),
    )


def _load_bucket(state: State, bucket: Loadable[BucketData]) -> Effects:
    if not bucket.is_loaded:
        return []
    state.bucket_id = bucket.value.uuid
    return [_fetch_participants(state.bucket_id), _fetch_is_owner(state.bucket_id)]


class BucketParticipantsComponent:
    def init(self, props: Optional[Props]) -> Tuple[State, Effects]:
        state = State()
        return state, _load_bucket(state, (props or Props()).bucket)

    def update(self, state: State, msg) -> Tuple[State, Effects]:
        if isinstance(msg, BucketChanged):
            return state, _load_bucket(state, msg.bucket)

        if isinstance(msg, GetBucketUserData):
            state.bucket_id = msg.bucket_id
            return state, [_fetch_participants(msg.bucket_id)]

        if isinstance(msg, BucketUserDataLoaded):
            state.users = Loadable.loaded(msg.users)
            return state, []

        if isinstance(msg, BucketUserDataFailed):
            log.warning("bucket_participants.load_failed", bucket_id=str(state.bucket_id),
                        error=msg.message)
            state.users = Loadable.failed(msg.message)
            return state, []

        if isinstance(msg, SetIsUserOwner):
            state.is_owner = Loadable.loaded(msg.is_owner)
            return state, []

        if isinstance(msg, RemoveUserFromBucket):
            if state.bucket_id is None:
                log.warning("bucket_participants.remove_without_bucket", user_id=str(msg.user_id))
                return state, []
            return state, [
                Fetch(
                    slot="remove_action",
                    request=api.remove_user_from_bucket(state.bucket_id, msg.user_id),
                    on_success=lambda _data: RemoveUserFinished(),
                    on_failure=RemoveUserFinished,
                )
            ]

        if isinstance(msg, RemoveUserFinished):
            if msg.error is None:
                state.remove_action = Uploadable.loaded(None)
            else:
                state.remove_action = Uploadable.failed(msg.error)
            if state.bucket_id is None:
                return state, []
            return state, [_fetch_participants(state.bucket_id)]

        raise TypeError(f"BucketParticipants cannot handle {msg!r}")

    def view(self, state: State) -> str:
        is_owner = state.is_owner.value_or(False)

        def render_user(user: UserData) -> str:
            name = html.escape(user.display_name)
            if not is_owner:
                return f'<div class="bucket-participant">{name}</div>'
            return (
                '<div class="bucket-participant">'
                f"{name}"
                f'<button class="remove-participant" data-user="{user.uuid}">Remove</button>'
                "</div>"
            )

        def render_users(users: List[UserData]) -> str:
            return "".join(render_user(u) for u in users)

        return (
            '<div class="bucket-action-pane">'
            f"{state.users.default_view(render_users)}"
            f"{state.remove_action.default_view(lambda _: '')}"
            "</div>"
        )


BucketParticipants = BucketParticipantsComponent()
