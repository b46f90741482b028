# main.py

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from storefront.core.config import settings
from storefront.core.error_handlers import setup_error_handlers, add_request_id_middleware
from storefront.core.rate_limiter import limiter
from storefront.auth.middleware import session_middleware, REFRESHED_TOKEN_HEADER
from storefront.database.core import Base, engine, SessionLocal
from storefront.database.seed import seed_database
from storefront.logging import logger

# Import models to ensure they are registered with SQLAlchemy
import storefront.database.models  # noqa: F401

from storefront.auth.controller import router as account_router
from storefront.home.controller import router as home_router
from storefront.products.controller import router as products_router
from storefront.customers.controller import router as customers_router
from storefront.orders.controller import router as orders_router
from storefront.cart.controller import router as cart_router
from storefront.uploads.controller import router as uploads_router
from storefront.admin.controller import router as admin_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting database initialization...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    if settings.SEED_DATA:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()

    logger.info(f"{settings.API_TITLE} started ({settings.ENVIRONMENT})")
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

# Set up error handlers
setup_error_handlers(app)

# Resolve the signed-in identity and slide its expiry
app.middleware("http")(session_middleware)

# Flash messages live in this cookie; idle sessions end after SESSION_IDLE_MINUTES
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    same_site='lax',
    https_only=settings.is_production,
    max_age=settings.SESSION_IDLE_MINUTES * 60,
    session_cookie=settings.SESSION_COOKIE_NAME
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", REFRESHED_TOKEN_HEADER],
)

# Add request ID middleware for better error tracking
app.middleware("http")(add_request_id_middleware)

app.state.limiter = limiter

app.include_router(account_router)
app.include_router(home_router)
app.include_router(products_router)
app.include_router(customers_router)
app.include_router(orders_router)
app.include_router(cart_router)
app.include_router(uploads_router)
app.include_router(admin_router)


@app.get("/health")
async def health_check():
    """Simple health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", settings.PORT))
    uvicorn.run("main:app", host=settings.HOST, port=port)
