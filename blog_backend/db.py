from __future__ import annotations

# blog_backend/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os

from .config import PROJECT_ROOT, read_config

# DB 路径解析顺序：
# 1) 环境变量 BLOG_DB_PATH（最高优先级）
# 2) config.yaml 的 test_db_path（当检测到测试环境时）
# 3) config.yaml 的 db_path（生产默认）
# 4) 兜底：项目根 blog.db
_ROOT_DB = os.path.join(PROJECT_ROOT, "blog.db")


def get_db_path(_: str | None = None) -> str:
    env_path = os.environ.get("BLOG_DB_PATH")
    cfg = read_config()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _ROOT_DB

    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    打开 foreign_keys，设置 row_factory 为 Row。
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def schema_sql() -> str:
    schema_path = os.path.join(os.path.dirname(__file__), "schema.sql")
    with open(schema_path, "r", encoding="utf-8") as f:
        return f.read()


def ensure_schema(db_path: str | None = None):
    with get_conn(db_path) as conn:
        conn.executescript(schema_sql())
