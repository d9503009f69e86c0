"""
Question and answer service.

Only approved bucket members may ask or answer. A question is returned
together with its author and all of its answers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from forum_server.core.errors import ForbiddenError, translate_db_errors
from forum_server.models.question import Answer, Question
from forum_server.models.user import User
from forum_server.services.buckets import buckets, is_user_approved
from forum_server.services.pagination import Page, paginate
from forum_server.services.repository import Repository
from forum_server.services.users import to_user_response, users
from forum_shared.identifiers import AnswerUuid, BucketUuid, QuestionUuid, UserUuid
from forum_shared.schemas.buckets import (
    AnswerResponse,
    NewAnswerRequest,
    NewQuestionRequest,
    QuestionResponse,
)

log = structlog.get_logger()

questions = Repository(Question, updatable=False)
answers = Repository(Answer, updatable=False)


@dataclass
class AnswerData:
    answer: Answer
    user: User


@dataclass
class QuestionData:
    question: Question
    user: User
    answers: List[AnswerData] = field(default_factory=list)


def to_answer_response(data: AnswerData) -> AnswerResponse:
    return AnswerResponse(
        uuid=data.answer.id,
        answer_text=data.answer.answer_text,
        author=to_user_response(data.user),
    )


def to_question_response(data: QuestionData) -> QuestionResponse:
    return QuestionResponse(
        uuid=data.question.id,
        bucket_uuid=data.question.bucket_id,
        question_text=data.question.question_text,
        author=to_user_response(data.user),
        created_date=data.question.created_date,
        answers=[to_answer_response(a) for a in data.answers],
    )


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

async def create_question(
    session: AsyncSession, req: NewQuestionRequest, author_id: UserUuid
) -> QuestionData:
    await buckets.get(session, req.bucket_uuid)
    if not await is_user_approved(session, req.bucket_uuid, author_id):
        raise ForbiddenError("Only approved bucket members may ask questions")
    question = await questions.create(
        session,
        Question(bucket_id=req.bucket_uuid, author_id=author_id, question_text=req.question_text),
    )
    log.info("question.created", question_id=str(question.id), bucket_id=str(question.bucket_id))
    return QuestionData(question=question, user=await users.get(session, author_id))


async def get_answers_for_question(
    session: AsyncSession, question_id: QuestionUuid
) -> List[AnswerData]:
    async with translate_db_errors("Answer"):
        result = await session.execute(
            select(Answer, User)
            .join(User, User.id == Answer.author_id)
            .where(Answer.question_id == question_id)
            .order_by(Answer.id)
        )
        return [AnswerData(answer=a, user=u) for a, u in result.all()]


async def get_question_data(session: AsyncSession, question_id: QuestionUuid) -> QuestionData:
    question = await questions.get(session, question_id)
    user = await users.get(session, question.author_id)
    return QuestionData(
        question=question,
        user=user,
        answers=await get_answers_for_question(session, question_id),
    )


async def get_questions_in_bucket(
    session: AsyncSession, bucket_id: BucketUuid, page_index: int, page_size: int
) -> Page[QuestionData]:
    """Newest questions first, each with its answers."""
    await buckets.get(session, bucket_id)
    stmt = (
        select(Question, User)
        .join(User, User.id == Question.author_id)
        .where(Question.bucket_id == bucket_id)
        .order_by(Question.created_date.desc(), Question.id)
    )
    page = await paginate(session, stmt, page_index, page_size)
    items = [
        QuestionData(question=q, user=u, answers=await get_answers_for_question(session, q.id))
        for q, u in page.items
    ]
    return Page(items=items, total_count=page.total_count,
                page_index=page.page_index, page_size=page.page_size)


async def get_question(session: AsyncSession, question_id: QuestionUuid) -> Question:
    return await questions.get(session, question_id)


async def delete_question(session: AsyncSession, question_id: QuestionUuid) -> QuestionData:
    data = await get_question_data(session, question_id)
    await questions.delete(session, question_id)
    log.info("question.deleted", question_id=str(question_id))
    return data


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

async def create_answer(
    session: AsyncSession, req: NewAnswerRequest, author_id: UserUuid
) -> AnswerData:
    question = await questions.get(session, req.question_uuid)
    if not await is_user_approved(session, question.bucket_id, author_id):
        raise ForbiddenError("Only approved bucket members may answer")
    answer = await answers.create(
        session,
        Answer(question_id=question.id, author_id=author_id, answer_text=req.answer_text),
    )
    log.info("answer.created", answer_id=str(answer.id), question_id=str(question.id))
    return AnswerData(answer=answer, user=await users.get(session, author_id))


async def get_answer(session: AsyncSession, answer_id: AnswerUuid) -> Answer:
    return await answers.get(session, answer_id)


async def delete_answer(session: AsyncSession, answer_id: AnswerUuid) -> AnswerData:
    answer = await get_answer(session, answer_id)
    user = await users.get(session, answer.author_id)
    await answers.delete(session, answer_id)
    log.info("answer.deleted", answer_id=str(answer_id))
    return AnswerData(answer=answer, user=user)
