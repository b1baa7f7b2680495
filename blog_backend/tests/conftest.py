import os
import sys
import sqlite3
import calendar
import datetime as dt
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


def unix(y: int, m: int, d: int, hh: int = 0, mm: int = 0) -> int:
    return calendar.timegm(dt.datetime(y, m, d, hh, mm).timetuple())


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "blog_test.db"
    # Point the backend to this temp DB
    os.environ["BLOG_DB_PATH"] = str(path)
    # Initialize schema
    schema = Path(_PROJECT_ROOT / "blog_backend" / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from blog_backend.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("BLOG_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("blog_post_categories", "blog_posts", "blog_categories"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def seed(tmp_db_path):
    """
    Small blog:
      categories: 1 tech, 2 life, 3 travel
      posts (id, slug, published, date, main category, linked categories):
        1 hello-world   pub   2021-03-01  tech   [tech, life]
        2 draft-notes   draft 2021-03-15  life   [life]
        3 april-update  pub   2021-04-01  life   [life, travel]
        4 going-abroad  pub   2022-01-10  travel [travel]
        5 no-links      pub   2020-12-31  tech   []
    """
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.executemany(
            "INSERT INTO blog_categories(id, title, slug) VALUES(?,?,?)",
            [(1, "Tech", "tech"), (2, "Life", "life"), (3, "Travel", "travel")],
        )
        conn.executemany(
            "INSERT INTO blog_posts(id, title, slug, published, date, content, maincategory_id) VALUES(?,?,?,?,?,?,?)",
            [
                (1, "Hello World", "hello-world", 1, unix(2021, 3, 1), "first post", 1),
                (2, "Draft Notes", "draft-notes", 0, unix(2021, 3, 15), "wip", 2),
                (3, "April Update", "april-update", 1, unix(2021, 4, 1), "news", 2),
                (4, "Going Abroad", "going-abroad", 1, unix(2022, 1, 10), "trip", 3),
                (5, "No Links", "no-links", 1, unix(2020, 12, 31, 23, 59), "lonely", 1),
            ],
        )
        conn.executemany(
            "INSERT INTO blog_post_categories(post_id, category_id) VALUES(?,?)",
            [(1, 1), (1, 2), (2, 2), (3, 2), (3, 3), (4, 3)],
        )
        conn.commit()
    finally:
        conn.close()
    return tmp_db_path
