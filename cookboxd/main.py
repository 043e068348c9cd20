from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cookboxd import __version__
from cookboxd.auth import router as auth_router
from cookboxd.categories import router as categories_router
from cookboxd.comments import router as comments_router
from cookboxd.core import db, settings
from cookboxd.core.errors import setup_exception_handlers
from cookboxd.core.logging_config import setup_logging
from cookboxd.ingredients import router as ingredients_router
from cookboxd.recipes import router as recipes_router
from cookboxd.users import router as users_router

ENDPOINTS = {
    "auth": "/auth",
    "users": "/users",
    "categories": "/categories",
    "recipes": "/recipes",
    "ingredients": "/ingredients",
    "comments": "/comments",
    "health": "/health",
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


def create_app(*, use_database: bool = True) -> FastAPI:
    """
    Build the API. Tests pass `use_database=False` and override
    `get_repositories` instead of opening a pool.
    """
    setup_logging(settings.log_level())

    app = FastAPI(
        title="Cookboxd API",
        version=__version__,
        lifespan=lifespan if use_database else None,
    )

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(users_router.router, tags=["users"])
    app.include_router(categories_router.router, tags=["categories"])
    app.include_router(recipes_router.router, tags=["recipes"])
    app.include_router(ingredients_router.router, tags=["ingredients"])
    app.include_router(comments_router.router, tags=["comments"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {
            "success": True,
            "message": "Cookboxd recipe API",
            "data": {"version": __version__, "endpoints": ENDPOINTS},
        }

    return app


app = create_app()
