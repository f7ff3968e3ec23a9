# portfolio/routers/health.py
from fastapi import APIRouter, Depends

from portfolio.core.settings import Settings, get_settings
from portfolio.routers.contact import get_mail_relay

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
async def health_root():
    return {"status": "ok"}

@router.get("/mail")
async def health_mail(
    settings: Settings = Depends(get_settings),
    relay=Depends(get_mail_relay),
):
    return {
        "ok": True,
        "delivery_enabled": relay is not None,
        "smtp_host": settings.smtp_host,
    }
