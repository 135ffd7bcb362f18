# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront.api import create_app
from storefront.data.database import Base, engine
from storefront.utils.logging import get_logger

# registers every model in Base.metadata before create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = create_app(lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
