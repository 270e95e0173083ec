# checkout_service/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from checkout_service.api import register_error_handlers
from checkout_service.api.routers import checkout, health, orders
from checkout_service.data.database import Base, engine
from checkout_service.utils.logging import get_logger

# every model has to be imported before create_all
import checkout_service.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Checkout Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
