"""Reducer components: each module exposes a component object with ``init``,
``update`` and ``view`` plus the message types it understands."""

from .article_list import ArticleList
from .auth import Auth, AuthPage
from .bucket_participants import BucketParticipants
from .post_tree import PostTree

__all__ = ["ArticleList", "Auth", "AuthPage", "BucketParticipants", "PostTree"]
