from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging

# Import all routers
from .routers import health, users, pods, sessions, badges, files, ai, video_calls
from .routers.chat import chat_router, websocket_router
from .services.chat.websocket_manager import websocket_manager

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting StudyPod API ({settings.environment})")

    yield

    logger.info("Shutting down StudyPod API")
    for handler in list(websocket_manager.active_connections.values()):
        await handler.close(close_transport=True)
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="StudyPod API",
    description="Study group pods with real-time chat, presence and AI-assisted matching",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

# Include all routers
app.include_router(health.router)
app.include_router(users.router)
app.include_router(pods.router)
app.include_router(sessions.router)
app.include_router(badges.router)
app.include_router(files.router)
app.include_router(ai.router)
app.include_router(video_calls.router)
app.include_router(chat_router)
app.include_router(websocket_router)

@app.get("/")
async def root():
    return {
        "message": "StudyPod API",
        "version": settings.app_version,
        "features": ["Study Pods", "Real-time Chat", "Presence", "AI Matching", "AI Study Assistant"],
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("studypod.main:app", host="0.0.0.0", port=8000, reload=True)
