"""
Blog records mapped from rows of blog_posts / blog_categories.
Built fresh for each query and never written back.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, asdict
from sqlite3 import Row
from typing import Any, Optional


def from_unix(ts: int) -> dt.datetime:
    return dt.datetime.fromtimestamp(int(ts), tz=dt.timezone.utc)


@dataclass
class Category:
    id: int
    title: str
    slug: str

    @classmethod
    def from_row(cls, row: Row) -> "Category":
        return cls(id=int(row["id"]), title=row["title"], slug=row["slug"])


@dataclass
class PostSummary:
    """Listing projection of a post: everything except the body."""
    id: int
    title: str
    slug: str
    published: bool
    date: dt.datetime
    main_category_id: int

    @property
    def unix_date(self) -> int:
        return int(self.date.timestamp())

    @classmethod
    def from_row(cls, row: Row) -> "PostSummary":
        return cls(
            id=int(row["id"]),
            title=row["title"],
            slug=row["slug"],
            published=bool(row["published"]),
            date=from_unix(row["date"]),
            main_category_id=int(row["maincategory_id"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Post(PostSummary):
    content: str = ""
    # Not a column; filled in by the repository after the query.
    main_category: Optional[Category] = None

    @classmethod
    def from_row(cls, row: Row) -> "Post":
        return cls(
            id=int(row["id"]),
            title=row["title"],
            slug=row["slug"],
            published=bool(row["published"]),
            date=from_unix(row["date"]),
            main_category_id=int(row["maincategory_id"]),
            content=row["content"] or "",
        )


@dataclass
class MonthYearCount:
    year: int
    month: int
    count: int

    @classmethod
    def from_row(cls, row: Row) -> "MonthYearCount":
        return cls(year=int(row["year"]), month=int(row["month"]), count=int(row["count"]))
