"""
Question and answer endpoints.

POST   /api/v1/question/                                   - Ask (approved members)
GET    /api/v1/question/bucket/{bucket_uuid}/{index}/{size} - Page through a bucket's questions
GET    /api/v1/question/{uuid}                             - A question with its answers
DELETE /api/v1/question/{uuid}                             - Delete your question
POST   /api/v1/answer/                                     - Answer (approved members)
GET    /api/v1/answer/question/{question_uuid}             - Answers to a question
DELETE /api/v1/answer/{uuid}                               - Delete your answer
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum_server.core.auth import AuthenticatedUser, ensure_owner, get_current_user
from forum_server.core.database import get_session
from forum_server.services import questions as question_service
from forum_shared.schemas.buckets import (
    AnswerResponse,
    NewAnswerRequest,
    NewQuestionRequest,
    QuestionPageResponse,
    QuestionResponse,
)

router = APIRouter()
answer_router = APIRouter()


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

@router.post("/", response_model=QuestionResponse, status_code=201)
async def create_question(
    body: NewQuestionRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    data = await question_service.create_question(session, body, auth.user_id)
    await session.commit()
    return question_service.to_question_response(data)


@router.get("/bucket/{bucket_uuid}/{index}/{size}", response_model=QuestionPageResponse)
async def get_questions_in_bucket(
    bucket_uuid: uuid.UUID,
    index: int,
    size: int,
    session: AsyncSession = Depends(get_session),
):
    page = await question_service.get_questions_in_bucket(session, bucket_uuid, index, size)
    return QuestionPageResponse(
        data=[question_service.to_question_response(d) for d in page.items],
        pagination=page.info(),
    )


@router.get("/{question_uuid}", response_model=QuestionResponse)
async def get_question(
    question_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    data = await question_service.get_question_data(session, question_uuid)
    return question_service.to_question_response(data)


@router.delete("/{question_uuid}", response_model=QuestionResponse)
async def delete_question(
    question_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    question = await question_service.questions.find(session, question_uuid)
    ensure_owner(question.author_id if question else None, auth)
    data = await question_service.delete_question(session, question_uuid)
    await session.commit()
    return question_service.to_question_response(data)


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

@answer_router.post("/", response_model=AnswerResponse, status_code=201)
async def create_answer(
    body: NewAnswerRequest,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    data = await question_service.create_answer(session, body, auth.user_id)
    await session.commit()
    return question_service.to_answer_response(data)


@answer_router.get("/question/{question_uuid}", response_model=List[AnswerResponse])
async def get_answers_for_question(
    question_uuid: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    await question_service.get_question(session, question_uuid)
    answers = await question_service.get_answers_for_question(session, question_uuid)
    return [question_service.to_answer_response(a) for a in answers]


@answer_router.delete("/{answer_uuid}", response_model=AnswerResponse)
async def delete_answer(
    answer_uuid: uuid.UUID,
    auth: AuthenticatedUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    answer = await question_service.answers.find(session, answer_uuid)
    ensure_owner(answer.author_id if answer else None, auth)
    data = await question_service.delete_answer(session, answer_uuid)
    await session.commit()
    return question_service.to_answer_response(data)
