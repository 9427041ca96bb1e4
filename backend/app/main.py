"""
Cat Registry Backend - FastAPI Application

Users and their cats, with ownership-checked mutations and a geographic
bounding-box search.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.core.error_handlers import register_error_handlers
from app.database.connections import get_mongo_client, close_connections
from app.database.indexes import create_indexes
from app.routers import auth, cats, health, users

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("cat_registry")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize database connection
    - Create indexes

    Shutdown:
    - Close the database connection
    """
    logger.info("Starting up Cat Registry Backend...")

    try:
        client = await get_mongo_client()
        await create_indexes(client)
        logger.info("Database indexes created")
    except Exception as e:
        logger.warning(f"Database initialization warning: {e}")

    yield

    logger.info("Shutting down Cat Registry Backend...")
    await close_connections()
    logger.info("Database connection closed")


app = FastAPI(
    title="Cat Registry API",
    description="""
## Cat Registry API

### Features
- **Users**: registration, self-service update and delete
- **Cats**: create with photo upload, owner and admin updates/deletes
- **Area search**: cats inside a longitude/latitude bounding box

### Authentication
Protected endpoints take a JWT token as a query parameter:
```
GET /cats/user?token=your_jwt_token
```

Obtain a token via `POST /auth/login`.

### Coordinates
All coordinates are **longitude first, then latitude**.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(cats.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Cat Registry API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
