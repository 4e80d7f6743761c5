from fastapi import APIRouter
from app.core.config import settings

router = APIRouter()

@router.get("/")
def server_running():
    return {"msg": "working"}

@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "project": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION
    }
