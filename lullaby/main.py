"""FastAPI app: CORS, router registration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from .api.sleep import router as sleep_router
from .core.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


app = FastAPI(
    title="Lullaby Sleep API",
    version="1.0.0",
    description="Lullaby - infant sleep prediction and pattern analysis",
)

cors_origins = settings.CORS_ORIGINS.copy()
if settings.CORS_EXTRA_ORIGINS:
    cors_origins.extend([o.strip() for o in settings.CORS_EXTRA_ORIGINS.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sleep_router)
