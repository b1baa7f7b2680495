from fastapi import APIRouter

from ..db import get_conn

router = APIRouter()

@router.get("/health")
def health():
    with get_conn() as conn:
        posts = conn.execute("SELECT COUNT(*) FROM blog_posts").fetchone()[0]
    return {"status": "ok", "posts": posts}

@router.get("/version")
def version():
    return {"app": "blog-api", "version": "0.1.0"}
