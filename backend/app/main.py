from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.health import router as health_router
from app.api.routes_products import router as products_router
from app.config import settings
from app.db.connector import DatabaseConnector
from app.errors import register_error_handlers


def create_app(connector: Optional[DatabaseConnector] = None) -> FastAPI:
    connector = connector or DatabaseConnector(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup: resolve config, write schema, open pool; failures abort startup
        connector.start()
        try:
            yield
        finally:
            connector.stop()

    app = FastAPI(title="Home Power - Products API", version="0.1.0", lifespan=lifespan)
    app.state.connector = connector

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health_router)

    app.include_router(products_router, prefix="/products", tags=["products"])

    return app


app = create_app()


def run():
    uvicorn.run(
        "app.main:app",
        host=settings.APP_HOST,
        port=settings.PORT,
        timeout_graceful_shutdown=settings.SHUTDOWN_GRACE_SECONDS,
    )


if __name__ == "__main__":
    run()
