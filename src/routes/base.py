from fastapi import APIRouter, Depends, Request
from utils import get_settings, Settings
from .dependencies import get_capabilities

base_router = APIRouter(
    prefix="/api/v1",
    tags=["api_v1"]
)


@base_router.get("/")
def welcome(request: Request, app_settings: Settings = Depends(get_settings)):
    return {
        "message": "Hello, welcome home",
        "version": app_settings.APP_VERSION,
        "name": app_settings.APP_NAME,
        "capabilities": get_capabilities(request).model_dump(),
    }
