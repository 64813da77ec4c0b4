"""
Food Ordering API - FastAPI application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from food_ordering import __version__
from food_ordering.api import auth, orders, payments, restaurants, users
from food_ordering.core.config import settings
from food_ordering.core.database import create_tables
from food_ordering.core.exceptions import register_exception_handlers
from food_ordering.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info(f"{settings.PROJECT_NAME} {__version__} started")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Country-scoped restaurant browsing and ordering",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(restaurants.router)
app.include_router(orders.router)
app.include_router(payments.router)
app.include_router(users.router)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "food-ordering-api"}

# API version info
@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }
