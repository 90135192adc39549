import os
from fastapi import APIRouter

from topdeals.core.config import settings

router = APIRouter(tags=["meta"])


# ✅ Root (GET /)
@router.get("/")
def root():
    return {
        "name": "Top Discounts API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "version": "/version",
        "products": "/api/products?collection=<handle>",
    }


# ✅ Health Check (GET /health)
@router.get("/health")
def health():
    return {"ok": True}


# ✅ Version endpoint (GET /version)
@router.get("/version")
def version():
    return {
        "version": settings.APP_VERSION,
        "build": settings.BUILD_ID,
        "git_commit": os.environ.get("VERCEL_GIT_COMMIT_SHA") or os.environ.get("RENDER_GIT_COMMIT"),
    }
