"""
Blog API
FastAPI application: authentication, user management and blog posts
"""
import logging

from fastapi import FastAPI

from blog_api.config import settings
from blog_api.core.error_handlers import setup_exception_handlers
from blog_api.core.lifespan import lifespan
from blog_api.core.middleware import setup_middleware
from blog_api.routes import auth, posts, system, users

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="REST API for user accounts and blog posts",
        lifespan=lifespan,
    )

    # Setup middleware (CORS, etc.)
    setup_middleware(app)
    setup_exception_handlers(app)

    # Include routes
    app.include_router(system.router)
    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(users.router, prefix=settings.API_PREFIX)
    app.include_router(posts.router, prefix=settings.API_PREFIX)

    return app


app = create_application()
