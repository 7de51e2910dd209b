"""
FastAPI Backend dla wizualizacji hex-scout.

Endpoints:
    GET  /api/health         - health check
    GET  /api/maps           - lista map
    GET  /api/maps/{map_id}  - szczegóły mapy (wiersze, origin)
    POST /api/path           - ścieżka BFS na mapie
    POST /api/fov            - pole widzenia na mapie
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.routers import maps, search, vision


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 hex-scout API starting...")
    print(f"📁 Data from: {maps.DATA_PATH}")
    yield
    print("👋 hex-scout API shutting down...")


app = FastAPI(
    title="hex-scout API",
    description="Backend API for hex grid pathfinding and line-of-sight visualization",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(maps.router, prefix="/api", tags=["Maps"])
app.include_router(search.router, prefix="/api", tags=["Search"])
app.include_router(vision.router, prefix="/api", tags=["Vision"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
