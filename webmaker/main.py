"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn webmaker.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from webmaker.core.config import settings
from webmaker.routers import generation, history, preferences, spec

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The editor front-end may be served from another origin (dev server)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# spec.router: /spec editing and export
# preferences.router: /templates, /theme
# generation.router: /generate, /preview, /artifacts
# history.router: /history
app.include_router(spec.router)
app.include_router(preferences.router)
app.include_router(generation.router)
app.include_router(history.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Liveness probe. Does not touch storage or the generation service.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
