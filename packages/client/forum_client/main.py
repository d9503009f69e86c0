"""
Client entry point.

Loads configuration, configures logging, runs one component against the
server until it is idle and prints its rendered view.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import uuid
from typing import Any, List

import structlog
from pydantic import ValidationError

from forum_shared.identifiers import BucketUuid, PostUuid

from .api import ApiClient
from .components import article_list, auth, bucket_participants, post_tree
from .config import ClientConfig, load_config
from .datatypes import BucketData
from .loadable import Loadable
from .logging import configure_logging
from .runtime import Component, Runtime


async def render(
    config: ClientConfig,
    component: Component,
    props: Any = None,
    messages: List[Any] | None = None,
    token: str | None = None,
) -> str:
    """Start ``component``, feed it ``messages`` and return the settled view."""
    async with ApiClient(config.api) as client:
        client.set_credential(token)
        runtime = Runtime(component, client, props)
        runtime.start()
        await runtime.run_until_idle()
        for msg in messages or []:
            runtime.dispatch(msg)
            await runtime.run_until_idle()
        return runtime.view()


def _parse_args(argv: List[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Joe's Forum terminal client")
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument("--token", default=None, help="Bearer token for authenticated calls")
    sub = parser.add_subparsers(dest="command", required=True)

    articles = sub.add_parser("articles", help="List published articles")
    articles.add_argument("--page", type=int, default=0)
    articles.add_argument("--size", type=int, default=article_list.DEFAULT_PAGE_SIZE)

    participants = sub.add_parser("participants", help="Show the members of a bucket")
    participants.add_argument("bucket", type=uuid.UUID, help="Bucket UUID")

    post = sub.add_parser("post", help="Show a post and its replies")
    post.add_argument("post", type=uuid.UUID, help="Post UUID")

    login = sub.add_parser("login", help="Log in and print the issued token")
    login.add_argument("user_name")
    login.add_argument("password")

    return parser.parse_args(argv)


async def _run_command(args: argparse.Namespace, config: ClientConfig) -> str:
    if args.command == "articles":
        props = article_list.Props(page_index=args.page, page_size=args.size)
        return await render(config, article_list.ArticleList, props, token=args.token)

    if args.command == "participants":
        # The pane only needs the bucket id; name and visibility are not shown
        bucket = BucketData(
            uuid=BucketUuid(args.bucket), bucket_name="", is_public=True
        )
        props = bucket_participants.Props(bucket=Loadable.loaded(bucket))
        return await render(config, bucket_participants.BucketParticipants, props, token=args.token)

    if args.command == "post":
        props = post_tree.Props(post_id=PostUuid(args.post))
        return await render(config, post_tree.PostTree, props, token=args.token)

    if args.command == "login":
        async with ApiClient(config.api) as client:
            runtime = Runtime(auth.Auth, client, auth.Props())
            runtime.start()
            runtime.dispatch(auth.SubmitLogin(args.user_name, args.password))
            await runtime.run_until_idle()
            if client.token is not None:
                return client.token
            return runtime.view()

    raise ValueError(f"Unknown command: {args.command}")


def run(argv: List[str] | None = None) -> None:
    """CLI entry point for the client."""
    args = _parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level, config.logging.format)
    log = structlog.get_logger()
    log.debug("client.config_loaded", config_path=args.config, url=config.api.url)

    try:
        print(asyncio.run(_run_command(args, config)))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
