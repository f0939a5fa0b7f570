"""FastAPI main application."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from adfluence.config import settings
from adfluence.database import SessionLocal, init_db
from adfluence.errors import register_error_handlers
from adfluence.routers import auth, niches, campaigns, dashboard, health
from adfluence.middleware import (
    SecurityHeadersMiddleware,
    RequestValidationMiddleware,
    AuditLogMiddleware
)
from adfluence.services.logging_service import logger
from adfluence.services.niche_service import seed_default_niches


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, prepare upload storage and seed the niche catalog."""
    init_db()
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

    if settings.SEED_NICHES:
        db = SessionLocal()
        try:
            seed_default_niches(db)
        finally:
            db.close()

    logger.info("Application started", environment=settings.ENVIRONMENT, port=settings.PORT)
    yield
    logger.info("Application shutting down")


# Create FastAPI application
app = FastAPI(
    title="Adfluence API",
    description="Marketplace connecting brands and agencies with influencers",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestValidationMiddleware, max_content_length=settings.MAX_UPLOAD_SIZE + 64 * 1024)
app.add_middleware(AuditLogMiddleware)

register_error_handlers(app)


@app.get("/")
def root():
    """Root endpoint - API banner."""
    return {
        "message": "Adfluence API",
        "version": settings.APP_VERSION,
        "status": "operational",
        "environment": settings.ENVIRONMENT,
        "documentation": "/docs"
    }


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api", tags=["Authentication"])
app.include_router(niches.router, prefix="/api", tags=["Niches"])
app.include_router(campaigns.router, prefix="/api", tags=["Campaigns"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])

# Uploaded campaign images
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "adfluence.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG
    )
