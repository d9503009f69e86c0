"""Bucket, question and answer schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, UUID4

from .common import PageInfo
from .users import UserResponse


# ---------------------------------------------------------------------------
# Buckets
# ---------------------------------------------------------------------------

class NewBucketRequest(BaseModel):
    bucket_name: str = Field(min_length=1, max_length=200)
    is_public: bool = True


class BucketResponse(BaseModel):
    uuid: UUID4
    bucket_name: str
    is_public: bool
    created_date: datetime


class BucketPageResponse(BaseModel):
    data: List[BucketResponse]
    pagination: PageInfo


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

class NewAnswerRequest(BaseModel):
    question_uuid: UUID4
    answer_text: Optional[str] = None


class AnswerResponse(BaseModel):
    uuid: UUID4
    answer_text: Optional[str] = None
    author: UserResponse


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

class NewQuestionRequest(BaseModel):
    bucket_uuid: UUID4
    question_text: str = Field(min_length=1)


class QuestionResponse(BaseModel):
    uuid: UUID4
    bucket_uuid: UUID4
    question_text: str
    author: UserResponse
    created_date: datetime
    answers: List[AnswerResponse] = Field(default_factory=list)


class QuestionPageResponse(BaseModel):
    data: List[QuestionResponse]
    pagination: PageInfo
