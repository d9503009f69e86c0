"""Component behaviour driven through the runtime against a mocked server."""

import json
import uuid

import httpx
import pytest

from forum_client.components import article_list, auth, bucket_participants, post_tree
from forum_client.components.auth import AuthPage
from forum_client.datatypes import BucketData, UserData
from forum_client.loadable import Loadable, Uploadable


# ---------------------------------------------------------------------------
# ArticleList
# ---------------------------------------------------------------------------

@pytest.fixture
def article_server(user_payload):
    """Two published articles served one per page."""
    author = user_payload("alice")
    titles = ["First post", "Second post"]
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        *_, index, size = request.url.path.split("/")
        index, size = int(index), int(size)
        chunk = titles[index * size:(index + 1) * size]
        return httpx.Response(200, json={
            "data": [
                {
                    "uuid": str(uuid.uuid4()),
                    "author": author,
                    "title": title,
                    "slug": title.lower().replace(" ", "-") + "-abcd1234",
                    "body_preview": f"Body of {title}",
                    "publish_date": "2024-03-01T12:00:00Z",
                }
                for title in chunk
            ],
            "pagination": {
                "page_index": index,
                "page_size": size,
                "total_count": len(titles),
                "page_count": -(-len(titles) // size),
            },
        })

    handler.requested = requested
    return handler


async def test_article_list_loads_first_page(make_runtime, article_server):
    runtime = await make_runtime(
        article_list.ArticleList, article_server, article_list.Props(page_size=1)
    )
    assert runtime.state.articles.is_loading

    await runtime.run_until_idle()
    view = runtime.view()

    assert "First post" in view
    assert "Second post" not in view
    assert "Alice" in view
    assert "2024-03-01" in view
    assert "pager-next" in view
    assert "pager-previous" not in view
    assert article_server.requested == ["/api/v1/article/articles/0/1"]


async def test_article_list_next_and_previous(make_runtime, article_server):
    runtime = await make_runtime(
        article_list.ArticleList, article_server, article_list.Props(page_size=1)
    )
    await runtime.run_until_idle()

    runtime.dispatch(article_list.NextPage())
    await runtime.run_until_idle()
    assert runtime.state.page_index == 1
    assert "Second post" in runtime.view()
    assert "pager-next" not in runtime.view()

    # No page after the last one
    runtime.dispatch(article_list.NextPage())
    await runtime.run_until_idle()
    assert runtime.state.page_index == 1

    runtime.dispatch(article_list.PreviousPage())
    await runtime.run_until_idle()
    assert runtime.state.page_index == 0
    assert "First post" in runtime.view()

    runtime.dispatch(article_list.PreviousPage())
    await runtime.run_until_idle()
    assert article_server.requested == [
        "/api/v1/article/articles/0/1",
        "/api/v1/article/articles/1/1",
        "/api/v1/article/articles/0/1",
    ]


async def test_article_list_failure_view(make_runtime, error_payload):
    def handler(request):
        return httpx.Response(503, json=error_payload(503, "Database unavailable"))

    runtime = await make_runtime(article_list.ArticleList, handler)
    await runtime.run_until_idle()

    assert runtime.state.articles == Loadable.failed("Database unavailable")
    assert '<div class="flexbox-center">Database unavailable</div>' in runtime.view()


async def test_article_list_empty(make_runtime):
    def handler(request):
        return httpx.Response(200, json={
            "data": [],
            "pagination": {"page_index": 0, "page_size": 10, "total_count": 0, "page_count": 0},
        })

    runtime = await make_runtime(article_list.ArticleList, handler)
    await runtime.run_until_idle()
    assert "No articles yet" in runtime.view()


# ---------------------------------------------------------------------------
# BucketParticipants
# ---------------------------------------------------------------------------

BUCKET_ID = uuid.UUID("11111111-1111-4111-8111-111111111111")


@pytest.fixture
def bucket_props():
    bucket = BucketData(uuid=BUCKET_ID, bucket_name="Physics", is_public=True)
    return bucket_participants.Props(bucket=Loadable.loaded(bucket))


@pytest.fixture
def bucket_server(user_payload, error_payload):
    """Serves a mutable member list; ownership is configurable per test."""
    members = [user_payload("alice"), user_payload("bob")]
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        calls.append((request.method, path))
        if path.endswith("/users"):
            return httpx.Response(200, json=members)
        if path.endswith("/is_owner"):
            if handler.owner is None:
                return httpx.Response(401, json=error_payload(401, "Not authenticated"))
            return httpx.Response(200, json=handler.owner)
        if request.method == "DELETE":
            removed = path.rsplit("/", 1)[-1]
            members[:] = [m for m in members if m["uuid"] != removed]
            return httpx.Response(204)
        return httpx.Response(404, json=error_payload(404, "Not found"))

    handler.owner = True
    handler.members = members
    handler.calls = calls
    return handler


async def test_participants_owner_sees_remove_buttons(make_runtime, bucket_server, bucket_props):
    runtime = await make_runtime(
        bucket_participants.BucketParticipants, bucket_server, bucket_props, token="tok"
    )
    await runtime.run_until_idle()

    view = runtime.view()
    assert view.startswith('<div class="bucket-action-pane">')
    assert "Alice" in view and "Bob" in view
    assert view.count(">Remove</button>") == 2
    assert runtime.state.is_owner == Loadable.loaded(True)


async def test_participants_non_owner_has_no_buttons(make_runtime, bucket_server, bucket_props):
    bucket_server.owner = False
    runtime = await make_runtime(
        bucket_participants.BucketParticipants, bucket_server, bucket_props, token="tok"
    )
    await runtime.run_until_idle()

    assert "Remove" not in runtime.view()
    assert "Alice" in runtime.view()


async def test_failed_owner_check_means_not_owner(make_runtime, bucket_server, bucket_props):
    bucket_server.owner = None
    runtime = await make_runtime(
        bucket_participants.BucketParticipants, bucket_server, bucket_props, token="tok"
    )
    await runtime.run_until_idle()

    assert runtime.state.is_owner == Loadable.loaded(False)
    assert "Remove" not in runtime.view()
    assert "flexbox-center" not in runtime.view()


async def test_anonymous_visitor_is_not_owner(make_runtime, bucket_server, bucket_props):
    runtime = await make_runtime(
        bucket_participants.BucketParticipants, bucket_server, bucket_props
    )
    await runtime.run_until_idle()

    assert runtime.state.is_owner == Loadable.loaded(False)
    assert ("GET", f"/api/v1/bucket/{BUCKET_ID}/is_owner") not in bucket_server.calls


async def test_remove_user_refetches_members(make_runtime, bucket_server, bucket_props):
    runtime = await make_runtime(
        bucket_participants.BucketParticipants, bucket_server, bucket_props, token="tok"
    )
    await runtime.run_until_idle()
    bob = runtime.state.users.value[1]

    runtime.dispatch(bucket_participants.RemoveUserFromBucket(user_id=bob.uuid))
    runtime.process(runtime.queue.get_nowait())
    assert runtime.state.remove_action.is_loading
    assert "Uploading..." in runtime.view()

    await runtime.run_until_idle()

    assert runtime.state.remove_action == Uploadable.loaded(None)
    assert [u.user_name for u in runtime.state.users.value] == ["alice"]
    users_fetches = [c for c in bucket_server.calls if c[1].endswith("/users")]
    assert len(users_fetches) == 2
    assert ("DELETE", f"/api/v1/bucket/{BUCKET_ID}/user/{bob.uuid}") in bucket_server.calls


async def test_failed_removal_still_refetches(make_runtime, bucket_server, bucket_props):
    runtime = await make_runtime(
        bucket_participants.BucketParticipants, bucket_server, bucket_props
    )
    await runtime.run_until_idle()
    alice = runtime.state.users.value[0]

    # No token: the removal fails before reaching the server
    runtime.dispatch(bucket_participants.RemoveUserFromBucket(user_id=alice.uuid))
    await runtime.run_until_idle()

    assert runtime.state.remove_action == Uploadable.failed("Not logged in")
    assert len(runtime.state.users.value) == 2
    users_fetches = [c for c in bucket_server.calls if c[1].endswith("/users")]
    assert len(users_fetches) == 2


async def test_participants_wait_for_bucket(make_runtime, bucket_server, bucket_props):
    runtime = await make_runtime(bucket_participants.BucketParticipants, bucket_server)
    await runtime.run_until_idle()
    assert runtime.state.users.is_unloaded
    assert bucket_server.calls == []

    runtime.dispatch(bucket_participants.BucketChanged(bucket_props.bucket))
    await runtime.run_until_idle()
    assert runtime.state.bucket_id == BUCKET_ID
    assert len(runtime.state.users.value) == 2


async def test_participants_load_failure(make_runtime, bucket_props, error_payload):
    def handler(request):
        return httpx.Response(404, json=error_payload(404, "Bucket not found"))

    runtime = await make_runtime(bucket_participants.BucketParticipants, handler, bucket_props)
    await runtime.run_until_idle()

    assert runtime.state.users == Loadable.failed("Bucket not found")
    assert "Bucket not found" in runtime.view()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

@pytest.fixture
def auth_server(user_payload, error_payload):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if request.url.path == "/api/v1/auth/login":
            if body["password"] != "correct-horse":
                return httpx.Response(
                    401, json=error_payload(401, "Invalid user name or password")
                )
            return httpx.Response(200, json={
                "token": "jwt-token",
                "token_type": "bearer",
                "user": user_payload(body["user_name"]),
            })
        if request.url.path == "/api/v1/user/":
            if body["user_name"] == "taken":
                return httpx.Response(409, json=error_payload(409, "User name already taken"))
            return httpx.Response(201, json=user_payload(body["user_name"], body["display_name"]))
        return httpx.Response(404, json=error_payload(404, "Not found"))

    return handler


async def test_login_stores_token_and_emits_callback(make_runtime, auth_server):
    logged_in = []
    runtime = await make_runtime(auth.Auth, auth_server, auth.Props(on_login=logged_in.append))

    runtime.dispatch(auth.SubmitLogin("alice", "correct-horse"))
    await runtime.run_until_idle()

    assert runtime.client.token == "jwt-token"
    assert len(logged_in) == 1
    assert isinstance(logged_in[0], UserData)
    assert logged_in[0].user_name == "alice"
    assert "Welcome, Alice" in runtime.view()


async def test_login_failure_shows_message(make_runtime, auth_server):
    runtime = await make_runtime(auth.Auth, auth_server)

    runtime.dispatch(auth.SubmitLogin("alice", "wrong"))
    await runtime.run_until_idle()

    assert runtime.client.token is None
    assert runtime.state.login_action == Uploadable.failed("Invalid user name or password")
    assert "Invalid user name or password" in runtime.view()


async def test_switch_pages(make_runtime, auth_server):
    runtime = await make_runtime(auth.Auth, auth_server)
    assert "<h2>Login</h2>" in runtime.view()

    runtime.dispatch(auth.SetPage(AuthPage.CREATE))
    await runtime.run_until_idle()
    assert "<h2>Create Account</h2>" in runtime.view()


async def test_create_account_navigates_to_login(make_runtime, auth_server):
    runtime = await make_runtime(auth.Auth, auth_server, auth.Props(page=AuthPage.CREATE))

    runtime.dispatch(auth.SubmitCreateAccount("carol", "Carol C", "secret1"))
    await runtime.run_until_idle()

    assert runtime.state.page is AuthPage.LOGIN
    assert runtime.state.create_action.value.display_name == "Carol C"
    assert runtime.client.token is None


async def test_create_account_failure_stays_on_page(make_runtime, auth_server):
    runtime = await make_runtime(auth.Auth, auth_server, auth.Props(page=AuthPage.CREATE))

    runtime.dispatch(auth.SubmitCreateAccount("taken", "Someone", "secret1"))
    await runtime.run_until_idle()

    assert runtime.state.page is AuthPage.CREATE
    assert "User name already taken" in runtime.view()


# ---------------------------------------------------------------------------
# PostTree
# ---------------------------------------------------------------------------

POST_ID = uuid.UUID("22222222-2222-4222-8222-222222222222")


@pytest.fixture
def post_server(user_payload, error_payload):
    thread = str(uuid.uuid4())

    def post(content, post_id=None, children=(), censored=False):
        return {
            "uuid": str(post_id or uuid.uuid4()),
            "thread_uuid": thread,
            "author": user_payload("alice"),
            "content": content,
            "created_date": "2024-05-01T08:00:00Z",
            "censored": censored,
            "children": list(children),
        }

    tree = post(
        "opening",
        post_id=POST_ID,
        children=[
            post("reply", children=[post("nested")]),
            post("This post has been censored by a moderator.", censored=True),
        ],
    )

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == f"/api/v1/post/{POST_ID}":
            return httpx.Response(200, json=tree)
        return httpx.Response(404, json=error_payload(404, "Post not found"))

    return handler


async def test_post_tree_renders_nested_replies(make_runtime, post_server):
    runtime = await make_runtime(post_tree.PostTree, post_server, post_tree.Props(POST_ID))
    await runtime.run_until_idle()

    post = runtime.state.post.value
    assert post.content == "opening"
    assert post.children[0].content == "reply"
    assert post.children[0].children[0].content == "nested"

    view = runtime.view()
    assert view.index("opening") < view.index("reply") < view.index("nested")
    assert view.count('class="post censored"') == 1


async def test_post_tree_missing_post(make_runtime, post_server):
    runtime = await make_runtime(post_tree.PostTree, post_server, post_tree.Props(uuid.uuid4()))
    await runtime.run_until_idle()

    assert runtime.state.post == Loadable.failed("Post not found")

    runtime.dispatch(post_tree.Reload())
    await runtime.run_until_idle()
    assert runtime.state.post.is_failed
