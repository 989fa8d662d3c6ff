# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from app.api import register_exception_handlers
from app.api.routers import carts, health, products
from app.data.database import Base, engine
from app.utils.logging import get_logger
from app.utils.retry import db_connect_retry

# import modeli przed create_all - rejestracja w Base.metadata
from app.data import models  # noqa: F401

logger = get_logger(__name__)


@db_connect_retry()
def init_db(bind=engine):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Catalog & Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
