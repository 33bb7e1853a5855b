import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from database import engine, Base
from config import settings
from routers import readiness

# Import all models to ensure they're registered with SQLAlchemy
from models.readiness import ReadinessAssessment

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s starting", settings.APP_NAME, settings.APP_VERSION)
    logger.info("Database URL: %s", settings.DATABASE_URL)
    logger.info("Persist results: %s", settings.PERSIST_RESULTS)

    routes_by_tag = {}
    for route in app.routes:
        if hasattr(route, 'methods') and hasattr(route, 'path') and hasattr(route, 'tags'):
            methods = sorted(m for m in (route.methods or []) if m not in ('HEAD', 'OPTIONS'))
            tag = route.tags[0] if route.tags else 'general'
            routes_by_tag.setdefault(tag, []).append(f"{', '.join(methods):>6} {route.path}")

    for tag, routes in sorted(routes_by_tag.items()):
        logger.info("[%s] %s", tag.upper(), "; ".join(sorted(routes)))

    yield

    logger.info("Shutting down %s", settings.APP_NAME)

app = FastAPI(
    title=settings.APP_NAME,
    description="Scholarship readiness self-assessment and scoring",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(readiness.router, prefix="/api/readiness", tags=["readiness"])

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "timestamp": time.time(),
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "api": {
                "readiness": "/api/readiness",
                "quick_check": "/api/readiness/quick-check"
            }
        }
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "timestamp": time.time()
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
