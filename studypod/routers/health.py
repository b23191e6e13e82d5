"""Health check endpoints."""
from fastapi import APIRouter, Depends
import logging

from ..core.config import settings
from ..core.database import health_check_db
from ..services.chat.websocket_manager import PodConnectionManager, get_connection_manager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "StudyPod API",
        "version": settings.app_version,
        "environment": settings.environment,
    }

@router.get("/db")
async def database_health():
    """Database health check"""
    healthy = await health_check_db()
    return {
        "status": "healthy" if healthy else "unhealthy",
        "database": "connected" if healthy else "unreachable",
    }

@router.get("/realtime")
async def realtime_health(manager: PodConnectionManager = Depends(get_connection_manager)):
    """Live WebSocket rooms and connections in this process"""
    return {"status": "healthy", **manager.stats()}
