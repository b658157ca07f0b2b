# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from app.data.database import Base, engine
from app.api import include_routers
from app.utils.logging import get_logger
import uvicorn

# import wszystkich modeli przed create_all
from app.data import models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables created")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Cart & Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    return include_routers(app)


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
