# storefront/main.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
import uvicorn

from storefront.data.database import Base, engine
from storefront.api.routers import carts, checkout, health, orders
from storefront.utils.settings import SEED_ON_STARTUP
from storefront.utils.logging import get_logger

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")


#awarie bazy/redisa - ogolny komunikat, bez ponawiania tutaj
async def storage_error_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} failed on storage: {exc!r}")
    return JSONResponse(
        status_code=503,
        content={"detail": {"code": "storage_unavailable", "message": "Storage temporarily unavailable"}},
    )


def create_app() -> FastAPI:
    init_db()

    if SEED_ON_STARTUP:
        from storefront.data.seed import seed
        seed()

    app = FastAPI(
        title="Storefront Order Service",
        version="1.0.0",
    )

    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(RedisError, storage_error_handler)

    # routery
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
