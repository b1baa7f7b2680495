"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so routes and the CLI avoid SQL strings.
"""
from __future__ import annotations

from .blog_repo import BlogRepository

__all__ = ["BlogRepository"]
