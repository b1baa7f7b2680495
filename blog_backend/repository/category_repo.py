from typing import Iterable, List, Optional
from sqlite3 import Connection, Row


def get_by_slug(conn: Connection, slug: str) -> Optional[Row]:
    return conn.execute(
        "SELECT id, title, slug FROM blog_categories WHERE slug = ? LIMIT 1", (slug,)
    ).fetchone()


def get_by_id(conn: Connection, category_id: int) -> Optional[Row]:
    return conn.execute(
        "SELECT id, title, slug FROM blog_categories WHERE id = ?", (category_id,)
    ).fetchone()


def list_by_ids(conn: Connection, ids: Iterable[int]) -> List[Row]:
    ids = list(ids)
    if not ids:
        return []
    q = "SELECT id, title, slug FROM blog_categories WHERE id IN ({})".format(
        ",".join(["?"] * len(ids))
    )
    return conn.execute(q, ids).fetchall()


def list_for_post(conn: Connection, post_id: int) -> List[Row]:
    sql = (
        "SELECT c.id, c.title, c.slug "
        "FROM blog_post_categories pc "
        "INNER JOIN blog_categories c ON c.id = pc.category_id "
        "WHERE pc.post_id = ?"
    )
    return conn.execute(sql, (post_id,)).fetchall()
