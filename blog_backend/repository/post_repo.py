"""
Post queries over blog_posts / blog_post_categories.
Each function runs one parameterized statement on the given connection.
"""
from __future__ import annotations

from typing import List, Optional
from sqlite3 import Connection, Row

POST_COLUMNS = "p.id, p.title, p.slug, p.published, p.date, p.content, p.maincategory_id"
SUMMARY_COLUMNS = "p.id, p.title, p.slug, p.published, p.date, p.maincategory_id"


def get_by_slug(conn: Connection, slug: str) -> Optional[Row]:
    return conn.execute(
        f"SELECT {POST_COLUMNS} FROM blog_posts p WHERE p.slug = ? LIMIT 1",
        (slug,),
    ).fetchone()


def get_summary_by_slug(conn: Connection, slug: str) -> Optional[Row]:
    return conn.execute(
        f"SELECT {SUMMARY_COLUMNS} FROM blog_posts p WHERE p.slug = ? LIMIT 1",
        (slug,),
    ).fetchone()


def latest_published(
    conn: Connection,
    count: int,
    offset: int = 0,
    category_id: Optional[int] = None,
    date_from: Optional[int] = None,
    date_to: Optional[int] = None,
) -> List[Row]:
    """
    Published posts, newest first, paged by LIMIT/OFFSET.

    Args:
        category_id: only posts linked to this category through blog_post_categories
        date_from: inclusive lower bound on the Unix date
        date_to: exclusive upper bound on the Unix date
    """
    sql = f"SELECT {POST_COLUMNS} FROM blog_posts p"
    where = ["p.published = 1"]
    params: list = []
    if category_id is not None:
        sql += " INNER JOIN blog_post_categories pc ON pc.post_id = p.id"
        where.append("pc.category_id = ?")
        params.append(category_id)
    if date_from is not None:
        where.append("p.date >= ?")
        params.append(date_from)
    if date_to is not None:
        where.append("p.date < ?")
        params.append(date_to)
    sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY p.date DESC LIMIT ? OFFSET ?"
    params.extend([count, offset])
    return conn.execute(sql, params).fetchall()


def latest_summaries(conn: Connection, count: int) -> List[Row]:
    # 不过滤 published：草稿也会列出
    return conn.execute(
        f"SELECT {SUMMARY_COLUMNS} FROM blog_posts p ORDER BY p.date DESC LIMIT ?",
        (count,),
    ).fetchall()


def count_published(
    conn: Connection,
    category_id: Optional[int] = None,
    date_from: Optional[int] = None,
    date_to: Optional[int] = None,
) -> int:
    sql = "SELECT COUNT(*) AS cnt FROM blog_posts p"
    where = ["p.published = 1"]
    params: list = []
    if category_id is not None:
        sql += " INNER JOIN blog_post_categories pc ON pc.post_id = p.id"
        where.append("pc.category_id = ?")
        params.append(category_id)
    if date_from is not None:
        where.append("p.date >= ?")
        params.append(date_from)
    if date_to is not None:
        where.append("p.date < ?")
        params.append(date_to)
    sql += " WHERE " + " AND ".join(where)
    return int(conn.execute(sql, params).fetchone()["cnt"])


def month_counts(conn: Connection, published_only: bool = False) -> List[Row]:
    """
    Rows of (year, month, count) grouped on the UTC calendar month of `date`,
    newest first.
    """
    sql = """
    SELECT CAST(strftime('%Y', date, 'unixepoch') AS INTEGER) AS year,
           CAST(strftime('%m', date, 'unixepoch') AS INTEGER) AS month,
           COUNT(*) AS count
    FROM blog_posts
    """
    if published_only:
        sql += " WHERE published = 1"
    sql += " GROUP BY year, month ORDER BY year DESC, month DESC"
    return conn.execute(sql).fetchall()
