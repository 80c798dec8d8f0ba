from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storerating.core.config import settings
from storerating.core.database import SessionLocal, init_db
from storerating.core.errors import register_exception_handlers
from storerating.core.logging import setup_logging
from storerating.routes.admin import router as admin_router
from storerating.routes.auth import router as auth_router
from storerating.routes.health import router as health_router
from storerating.routes.ratings import router as ratings_router
from storerating.routes.store_owner import router as store_owner_router
from storerating.routes.stores import router as stores_router
from storerating.routes.users import router as users_router
from storerating.services.bootstrap import ensure_admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    with SessionLocal() as db:
        ensure_admin(db)
    yield


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Store Rating API", version="0.1.0", lifespan=lifespan)

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(users_router, prefix="/users", tags=["users"])
    app.include_router(stores_router, prefix="/stores", tags=["stores"])
    app.include_router(ratings_router, prefix="/ratings", tags=["ratings"])
    app.include_router(admin_router, prefix="/admin", tags=["admin"])
    app.include_router(store_owner_router, prefix="/store-owner", tags=["store-owner"])

    return app


app = create_app()


def run() -> None:
    uvicorn.run("storerating.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
