import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.database import init_models

# Import models so they are registered with Base.metadata
from app.models import website, chat_request, prompt_set, code_config  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if settings.APP_ENV == "development":
        await init_models()
    logger.info("Chat widget API started (%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Chat Widget API",
    description="Website registry, knowledge base and answer matching for the chat widget",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "ok", "service": "chat-widget-api", "version": "0.1.0", "environment": settings.APP_ENV}
