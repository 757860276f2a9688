import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from devconnector.core.config import settings
from devconnector.core.database import engine, Base
from devconnector.core.errors import register_exception_handlers
from devconnector.core.logging_config import configure_logging
from devconnector.api.routes import auth, users, posts
# Imported for their side effect of registering tables on Base.metadata
from devconnector.models import post as post_models, user as user_models  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: configure logging and create tables that don't exist yet
    """
    configure_logging(settings.LOG_LEVEL)
    # In production, use migrations (Alembic) instead of create_all
    Base.metadata.create_all(bind=engine)
    logger.info("DevConnector API started")
    yield
    logger.info("DevConnector API stopped")


app = FastAPI(
    title="DevConnector API",
    description="Developer social network: users, posts, likes and comments",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# All routes are prefixed with /api
app.include_router(users.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(posts.router, prefix="/api")


@app.get("/")
async def root():
    return "API running!"


@app.get("/health")
async def health():
    """Health check endpoint - used by monitoring/deployment tools"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
