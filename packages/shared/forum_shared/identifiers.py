"""
Per-entity identifier types.

Every entity is keyed by a UUID. Wrapping the raw UUID in a distinct NewType
per entity lets a type checker reject passing, say, a ChatUuid where an
ArticleUuid is expected. At runtime they are plain ``uuid.UUID`` values.
"""

import uuid
from typing import NewType

UserUuid = NewType("UserUuid", uuid.UUID)
ArticleUuid = NewType("ArticleUuid", uuid.UUID)
ForumUuid = NewType("ForumUuid", uuid.UUID)
ThreadUuid = NewType("ThreadUuid", uuid.UUID)
PostUuid = NewType("PostUuid", uuid.UUID)
BucketUuid = NewType("BucketUuid", uuid.UUID)
QuestionUuid = NewType("QuestionUuid", uuid.UUID)
AnswerUuid = NewType("AnswerUuid", uuid.UUID)
ChatUuid = NewType("ChatUuid", uuid.UUID)
MessageUuid = NewType("MessageUuid", uuid.UUID)
