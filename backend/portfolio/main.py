# portfolio/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
import logging

from portfolio.core.settings import settings
from portfolio.routers.contact import router as contact_router
from portfolio.routers.health import router as health_router

app = FastAPI(title=settings.api_title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if not settings.delivery_enabled:
    logging.getLogger("uvicorn.error").info("[main] EMAIL_PASS not set; contact submissions will only be logged")

# Routers
app.include_router(contact_router)
app.include_router(health_router)

@app.get("/__routes")
async def __routes():
    return [
        {"methods": sorted(list(r.methods)), "path": r.path}
        for r in app.routes
        if isinstance(r, APIRoute)
    ]
