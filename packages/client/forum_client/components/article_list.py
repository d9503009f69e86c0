"""Paged list of published article previews."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .. import api
from ..datatypes import ArticlePage, ArticlePreviewData
from ..loadable import Loadable
from ..runtime import Effects, Fetch

DEFAULT_PAGE_SIZE = 10


@dataclass
class Props:
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class State:
    page_index: int
    page_size: int
    articles: Loadable[ArticlePage] = field(default_factory=Loadable.unloaded)


# Messages

@dataclass(frozen=True)
class LoadPage:
    page_index: int


@dataclass(frozen=True)
class NextPage:
    pass


@dataclass(frozen=True)
class PreviousPage:
    pass


@dataclass(frozen=True)
class ArticlesLoaded:
    page: ArticlePage


@dataclass(frozen=True)
class ArticlesFailed:
    message: Optional[str] = None


def _fetch_page(state: State, page_index: int) -> Fetch:
    state.page_index = page_index
    return Fetch(
        slot="articles",
        request=api.get_published_articles(page_index, state.page_size),
        on_success=lambda data: ArticlesLoaded(ArticlePage.from_response(data)),
        on_failure=ArticlesFailed,
    )


def _render_preview(article: ArticlePreviewData) -> str:
    published = article.publish_date.date().isoformat() if article.publish_date else ""
    return (
        '<div class="article-preview">'
        f'<h3 class="article-title">{html.escape(article.title)}</h3>'
        f'<div class="article-byline">{html.escape(article.author.display_name)} {published}</div>'
        f'<p class="article-body">{html.escape(article.body_preview)}</p>'
        "</div>"
    )


def _render_page(page: ArticlePage) -> str:
    if not page.articles:
        previews = '<div class="flexbox-center">No articles yet</div>'
    else:
        previews = "".join(_render_preview(a) for a in page.articles)
    pager = []
    if page.has_previous:
        pager.append('<button class="pager-previous">Previous</button>')
    pager.append(f'<span class="pager-position">{page.page_index + 1} / {max(page.page_count, 1)}</span>')
    if page.has_next:
        pager.append('<button class="pager-next">Next</button>')
    return f'{previews}<div class="pager">{"".join(pager)}</div>'


class ArticleListComponent:
    def init(self, props: Optional[Props]) -> Tuple[State, Effects]:
        props = props or Props()
        state = State(page_index=props.page_index, page_size=props.page_size)
        return state, [_fetch_page(state, props.page_index)]

    def update(self, state: State, msg) -> Tuple[State, Effects]:
        if isinstance(msg, LoadPage):
            return state, [_fetch_page(state, msg.page_index)]

        if isinstance(msg, NextPage):
            page = state.articles.value if state.articles.is_loaded else None
            if page is None or not page.has_next:
                return state, []
            return state, [_fetch_page(state, state.page_index + 1)]

        if isinstance(msg, PreviousPage):
            if state.page_index == 0:
                return state, []
            return state, [_fetch_page(state, state.page_index - 1)]

        if isinstance(msg, ArticlesLoaded):
            state.articles = Loadable.loaded(msg.page)
            state.page_index = msg.page.page_index
            return state, []

        if isinstance(msg, ArticlesFailed):
            state.articles = Loadable.failed(msg.message)
            return state, []

        raise TypeError(f"ArticleList cannot handle {msg!r}")

    def view(self, state: State) -> str:
        return f'<div class="article-list">{state.articles.default_view(_render_page)}</div>'


ArticleList = ArticleListComponent()
