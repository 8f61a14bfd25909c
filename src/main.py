import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo import AsyncMongoClient
from routes import (
    base_router, resume_router, webhook_router, interview_router,
    recruit_router, feedback_router, analytics_router,
)
from utils import get_settings, Capabilities
from stores import LLMProviderFactory, VoiceSessionFactory

logger = logging.getLogger("uvicorn.error")


async def connect_store(settings):
    """Open the Mongo client; (None, None) when unconfigured or unreachable."""
    if not settings.MONGO_DB:
        logger.warning("MONGO_DB is not set; running without a document store (demo mode)")
        return None, None
    client = AsyncMongoClient(settings.MONGO_DB, serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS)
    try:
        await client.admin.command("ping")
    except Exception as e:
        logger.warning(f"MongoDB is unreachable ({e}); running in demo mode")
        await client.close()
        return None, None
    return client, client[settings.DB_NAME]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app.state.mongodb_conn, app.state.db_client = await connect_store(settings)

    app.state.llm_provider_factory = LLMProviderFactory(settings)
    app.state.generation_client = app.state.llm_provider_factory.create(settings.GENERATION_BACKEND)
    app.state.voice_session_factory = VoiceSessionFactory(settings)

    app.state.capabilities = Capabilities.resolve(
        settings,
        store_ready=app.state.db_client is not None,
        generation_ready=app.state.generation_client is not None,
    )
    if not app.state.capabilities.webhook_verification:
        logger.warning("CALENDLY_WEBHOOK_SECRET is not set; webhook signatures will not be verified")
    logger.info(f"Capabilities: {app.state.capabilities.model_dump()}")
    try:
        yield
    finally:
        if app.state.mongodb_conn is not None:
            await app.state.mongodb_conn.close()
        app.state.llm_provider_factory = None
        app.state.generation_client = None
        app.state.voice_session_factory = None

settings = get_settings()
app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(base_router)
app.include_router(resume_router)
app.include_router(webhook_router)
app.include_router(interview_router)
app.include_router(recruit_router)
app.include_router(feedback_router)
app.include_router(analytics_router)
