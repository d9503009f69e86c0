"""Seed a development database with an admin, two forums and a few threads.

Usage:
    python -m forum_server.scripts.seed_fixtures --password s3cret

Reads FORUM_DATABASE_URL (or the default local PostgreSQL URL). Running it
twice is harmless: existing rows are left alone.
"""

from __future__ import annotations

import argparse
import asyncio

import structlog

from forum_server.core.config import get_settings
from forum_server.core.database import Database
from forum_server.core.logging import configure_logging
from forum_server.services import forums as forum_service
from forum_server.services import threads as thread_service
from forum_server.services import users as user_service
from forum_shared.schemas.common import Role
from forum_shared.schemas.forums import NewForumRequest, NewThreadRequest
from forum_shared.schemas.users import NewUserRequest

log = structlog.get_logger()

FORUMS = [
    ("General", "Anything goes, within reason."),
    ("Announcements", "News about the site."),
]
THREADS_PER_FORUM = 3


async def seed(db: Database, admin_name: str, password: str, create_tables: bool = False) -> None:
    if create_tables:
        await db.create_all()

    async with db.session() as session:
        admin = await user_service.get_user_by_name(session, admin_name)
        if admin is None:
            admin = await user_service.create_user(
                session,
                NewUserRequest(user_name=admin_name, display_name="Administrator",
                               plaintext_password=password),
                role=Role.ADMIN,
            )
        else:
            log.info("seed.user_exists", user_name=admin_name)

        existing = {f.title for f in await forum_service.get_forums(session)}
        for title, description in FORUMS:
            if title in existing:
                log.info("seed.forum_exists", title=title)
                continue
            forum = await forum_service.create_forum(
                session, NewForumRequest(title=title, description=description)
            )
            for n in range(1, THREADS_PER_FORUM + 1):
                await thread_service.create_thread_with_initial_post(
                    session,
                    NewThreadRequest(
                        forum_uuid=forum.id,
                        author_uuid=admin.id,
                        title=f"{title} thread {n}",
                        post_content=f"Opening post of {title.lower()} thread {n}.",
                    ),
                )

    log.info("seed.done", admin=admin_name)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed development fixtures")
    parser.add_argument("--admin", default="admin", help="Admin user name")
    parser.add_argument("--password", required=True, help="Admin password (min 5 characters)")
    parser.add_argument("--create-tables", action="store_true",
                        help="Create tables from the models first (skip when using Alembic)")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, "text")
    db = Database(settings)

    async def _run() -> None:
        try:
            await seed(db, args.admin, args.password, create_tables=args.create_tables)
        finally:
            await db.dispose()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
