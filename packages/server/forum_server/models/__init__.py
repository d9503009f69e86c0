# SQLModel definitions, imported here to ensure metadata is populated for Alembic.
from .base import UUIDMixin  # noqa: F401
from .user import User  # noqa: F401
from .article import Article  # noqa: F401
from .forum import Forum  # noqa: F401
from .thread import Thread  # noqa: F401
from .post import Post  # noqa: F401
from .bucket import Bucket, BucketUser  # noqa: F401
from .question import Question, Answer  # noqa: F401
from .chat import Chat, ChatUser, Message  # noqa: F401
