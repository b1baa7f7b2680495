"""
FastAPI app entry point aggregating the read-only blog routers under blog_backend/routes.
Keep as `uvicorn blog_backend.api:app`.
"""
from __future__ import annotations


from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .errors import ItemNotFoundError, DataIntegrityError


app = FastAPI(title="blog-api", version="0.1.0")


@app.exception_handler(ItemNotFoundError)
def _not_found(_: Request, exc: ItemNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.code, "key": exc.key})


@app.exception_handler(DataIntegrityError)
def _integrity(_: Request, exc: DataIntegrityError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# Include routers
from .routes import base as base_routes
from .routes import blog as blog_routes

app.include_router(base_routes.router)
app.include_router(blog_routes.router)
