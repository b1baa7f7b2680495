from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import read_config
from ..repository import BlogRepository

router = APIRouter()


def get_repository() -> BlogRepository:
    return BlogRepository()


def _paging(page: int, size: int | None) -> tuple[int, int]:
    size = size or read_config()["page_size"]
    return size, (page - 1) * size


@router.get("/api/blog/posts")
def api_latest_posts(
    page: int = Query(1, ge=1),
    size: int | None = Query(None, ge=1, le=100),
    repo: BlogRepository = Depends(get_repository),
):
    count, offset = _paging(page, size)
    posts = repo.latest_posts(count, offset)
    return {"total": repo.published_count(), "items": [p.to_dict() for p in posts]}


@router.get("/api/blog/posts/summary")
def api_latest_summary(
    count: int = Query(10, ge=1, le=100),
    repo: BlogRepository = Depends(get_repository),
):
    return [p.to_dict() for p in repo.latest_posts_summary(count)]


@router.get("/api/blog/post/{slug}")
def api_post(slug: str, repo: BlogRepository = Depends(get_repository)):
    post = repo.get_by_slug(slug)
    out = post.to_dict()
    out["categories"] = [c.__dict__ for c in repo.categories_for_post(post)]
    return out


@router.get("/api/blog/category/{slug}")
def api_category_posts(
    slug: str,
    page: int = Query(1, ge=1),
    size: int | None = Query(None, ge=1, le=100),
    repo: BlogRepository = Depends(get_repository),
):
    category = repo.get_category(slug)
    count, offset = _paging(page, size)
    posts = repo.latest_posts(count, offset, category=category)
    return {
        "category": category.__dict__,
        "total": repo.published_count(category),
        "items": [p.to_dict() for p in posts],
    }


@router.get("/api/blog/archive")
def api_archive(repo: BlogRepository = Depends(get_repository)):
    return repo.month_counts()


@router.get("/api/blog/archive/{year}/{month}")
def api_archive_month(
    year: int,
    month: int,
    page: int = Query(1, ge=1),
    size: int | None = Query(None, ge=1, le=100),
    repo: BlogRepository = Depends(get_repository),
):
    if not (1 <= month <= 12 and 1 <= year < 9999):
        raise HTTPException(status_code=404, detail="month_not_found")
    count, offset = _paging(page, size)
    posts = repo.latest_posts_for_month(year, month, count, offset)
    return {
        "year": year,
        "month": month,
        "total": repo.published_count_for_month(year, month),
        "items": [p.to_dict() for p in posts],
    }
