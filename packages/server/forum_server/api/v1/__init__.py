"""
API v1 Router

One sub-router per entity, mounted under /api/v1.
"""

from fastapi import APIRouter

from forum_shared.schemas.common import ErrorResponse

from . import articles, auth, buckets, chats, forums, posts, questions, threads, users

# Every v1 route can answer with the error body rendered by the ForumError handlers
ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 403, 404, 405, 409, 503)
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(users.router, prefix="/user", tags=["Users"])
router.include_router(articles.router, prefix="/article", tags=["Articles"])
router.include_router(forums.router, prefix="/forum", tags=["Forums"])
router.include_router(threads.router, prefix="/thread", tags=["Threads"])
router.include_router(posts.router, prefix="/post", tags=["Posts"])
router.include_router(buckets.router, prefix="/bucket", tags=["Buckets"])
router.include_router(questions.router, prefix="/question", tags=["Questions"])
router.include_router(questions.answer_router, prefix="/answer", tags=["Answers"])
router.include_router(chats.router, prefix="/chat", tags=["Chats"])
router.include_router(chats.message_router, prefix="/message", tags=["Messages"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: version and resource prefixes."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/auth", "/user", "/article", "/forum", "/thread", "/post",
            "/bucket", "/question", "/answer", "/chat", "/message",
        ],
    }
