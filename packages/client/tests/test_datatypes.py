"""Wire payload to view data conversion."""

import uuid

import pytest
from pydantic import ValidationError

from forum_client.datatypes import ArticlePage, BucketData, PostData, UserData
from forum_shared.schemas.common import Role


@pytest.fixture
def post_payload(user_payload):
    thread = str(uuid.uuid4())

    def _make(content: str, children=(), censored: bool = False):
        return {
            "uuid": str(uuid.uuid4()),
            "thread_uuid": thread,
            "author": user_payload("alice"),
            "content": content,
            "created_date": "2024-05-01T08:00:00Z",
            "censored": censored,
            "children": list(children),
        }
    return _make


def test_user_data(user_payload):
    payload = user_payload("mod", "The Moderator", role="moderator")
    user = UserData.from_response(payload)
    assert user.uuid == uuid.UUID(payload["uuid"])
    assert user.display_name == "The Moderator"
    assert user.role is Role.MODERATOR


def test_user_data_rejects_missing_fields():
    with pytest.raises(ValidationError):
        UserData.from_response({"user_name": "x"})


def test_post_children_are_converted_recursively(post_payload):
    leaf = post_payload("leaf")
    middle = post_payload("middle", children=[leaf])
    root = PostData.from_response(post_payload("root", children=[middle, post_payload("sibling")]))

    assert root.content == "root"
    assert [c.content for c in root.children] == ["middle", "sibling"]
    assert root.children[0].children[0].content == "leaf"
    assert root.children[0].children[0].author.user_name == "alice"
    assert root.modified_date is None


def test_bucket_data():
    bucket_id = uuid.uuid4()
    bucket = BucketData.from_response({
        "uuid": str(bucket_id),
        "bucket_name": "Physics",
        "is_public": False,
        "created_date": "2024-01-01T00:00:00Z",
    })
    assert bucket == BucketData(uuid=bucket_id, bucket_name="Physics", is_public=False)


def test_article_page_navigation(user_payload):
    page = ArticlePage.from_response({
        "data": [{
            "uuid": str(uuid.uuid4()),
            "author": user_payload(),
            "title": "T",
            "slug": "t-00ff00ff",
            "body_preview": "B",
            "publish_date": None,
        }],
        "pagination": {"page_index": 1, "page_size": 1, "total_count": 3, "page_count": 3},
    })
    assert page.articles[0].title == "T"
    assert page.has_previous
    assert page.has_next
