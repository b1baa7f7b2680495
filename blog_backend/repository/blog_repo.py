"""
Blog repository: posts and categories for the public site.

Every method opens one connection from the injected factory, runs its
queries and returns freshly built records. Nothing is cached between calls.
"""
from __future__ import annotations

import calendar
import datetime as dt
import logging
from contextlib import AbstractContextManager
from sqlite3 import Connection
from typing import Callable, Dict, List, Optional, Tuple

from ..db import get_conn
from ..errors import DataIntegrityError, ItemNotFoundError
from ..models import Category, MonthYearCount, Post, PostSummary
from . import category_repo, post_repo

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[], AbstractContextManager[Connection]]


def month_range(year: int, month: int) -> Tuple[int, int]:
    """
    Unix bounds [first day of month, first day of next month) in UTC.
    Raises ValueError for an invalid month.
    """
    first = dt.datetime(year, month, 1)
    if month == 12:
        nxt = dt.datetime(year + 1, 1, 1)
    else:
        nxt = dt.datetime(year, month + 1, 1)
    return calendar.timegm(first.timetuple()), calendar.timegm(nxt.timetuple())


class BlogRepository:
    def __init__(self, connection_factory: ConnectionFactory = get_conn):
        self._connect = connection_factory

    def get_by_slug(self, slug: str) -> Post:
        with self._connect() as conn:
            row = post_repo.get_by_slug(conn, slug)
            if row is None:
                raise ItemNotFoundError("post_not_found", slug)
            post = Post.from_row(row)

            # TODO: resolve the main category with a join in the query above
            cat = category_repo.get_by_id(conn, post.main_category_id)
        if cat is None:
            logger.warning("post %s references missing category %s", post.id, post.main_category_id)
            raise DataIntegrityError(f"category_missing: {post.main_category_id}")
        post.main_category = Category.from_row(cat)
        return post

    def get_summary_by_slug(self, slug: str) -> PostSummary:
        with self._connect() as conn:
            row = post_repo.get_summary_by_slug(conn, slug)
        if row is None:
            raise ItemNotFoundError("post_not_found", slug)
        return PostSummary.from_row(row)

    def categories_for_post(self, post: PostSummary) -> List[Category]:
        with self._connect() as conn:
            rows = category_repo.list_for_post(conn, post.id)
        return [Category.from_row(r) for r in rows]

    def latest_posts(
        self,
        count: int = 10,
        offset: int = 0,
        category: Optional[Category] = None,
    ) -> List[Post]:
        """Latest published posts, optionally only those filed under `category`."""
        with self._connect() as conn:
            rows = post_repo.latest_published(
                conn, count, offset,
                category_id=category.id if category is not None else None,
            )
            posts = [Post.from_row(r) for r in rows]
            self._add_main_categories(conn, posts)
        return posts

    def latest_posts_in_category(self, category: Category, count: int = 10, offset: int = 0) -> List[Post]:
        return self.latest_posts(count, offset, category=category)

    def latest_posts_for_month(self, year: int, month: int, count: int = 10, offset: int = 0) -> List[Post]:
        date_from, date_to = month_range(year, month)
        with self._connect() as conn:
            rows = post_repo.latest_published(conn, count, offset, date_from=date_from, date_to=date_to)
            posts = [Post.from_row(r) for r in rows]
            self._add_main_categories(conn, posts)
        return posts

    def latest_posts_summary(self, count: int = 10) -> List[PostSummary]:
        """Most recent posts including drafts, without content."""
        with self._connect() as conn:
            rows = post_repo.latest_summaries(conn, count)
        return [PostSummary.from_row(r) for r in rows]

    def month_counts(self, published_only: bool = False) -> Dict[int, Dict[int, int]]:
        """
        Number of posts per year and month: {year: {month: count}}.

        Drafts are counted too unless `published_only` is set, so the totals
        can exceed published_count().
        """
        with self._connect() as conn:
            rows = post_repo.month_counts(conn, published_only=published_only)

        results: Dict[int, Dict[int, int]] = {}
        for row in rows:
            c = MonthYearCount.from_row(row)
            if c.year not in results:
                results[c.year] = {}
            results[c.year][c.month] = c.count
        return results

    def get_category(self, slug: str) -> Category:
        with self._connect() as conn:
            row = category_repo.get_by_slug(conn, slug)
        if row is None:
            raise ItemNotFoundError("category_not_found", slug)
        return Category.from_row(row)

    def published_count(self, category: Optional[Category] = None) -> int:
        with self._connect() as conn:
            return post_repo.count_published(
                conn, category_id=category.id if category is not None else None
            )

    def published_count_in_category(self, category: Category) -> int:
        return self.published_count(category=category)

    def published_count_for_month(self, year: int, month: int) -> int:
        date_from, date_to = month_range(year, month)
        with self._connect() as conn:
            return post_repo.count_published(conn, date_from=date_from, date_to=date_to)

    def _add_main_categories(self, conn: Connection, posts: List[Post]):
        """
        Load the main category of every post in one query and attach it.
        Raises DataIntegrityError if a referenced category has no row.
        """
        ids = sorted({p.main_category_id for p in posts})
        if not ids:
            return

        categories = {c.id: c for c in (Category.from_row(r) for r in category_repo.list_by_ids(conn, ids))}
        missing = [i for i in ids if i not in categories]
        if missing:
            logger.warning("posts reference missing categories %s", missing)
            raise DataIntegrityError(f"category_missing: {missing}")
        for post in posts:
            post.main_category = categories[post.main_category_id]
        logger.debug("attached %d main categories to %d posts", len(categories), len(posts))
