# src/quillpost/main.py
"""Main entry point for the Quillpost application."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from quillpost.api.v1 import auth_router, comments_router, posts_router, system_router
from quillpost.api.v1.dependencies import enforce_access_policy
from quillpost.api.v1.errors import register_exception_handlers
from quillpost.core.settings import settings
from quillpost.db.session import create_tables
from quillpost.services.tokens import get_token_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Blog API with accounts, comments and password-protected posts",
    version=settings.app_version,
    debug=settings.debug,
    dependencies=[Depends(enforce_access_policy)],
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

app.include_router(system_router)
app.include_router(auth_router)
app.include_router(posts_router)
app.include_router(comments_router)


@app.on_event("startup")
async def on_startup() -> None:
    # Building the token service validates the signing key before traffic arrives.
    get_token_service()
    create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quillpost.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
