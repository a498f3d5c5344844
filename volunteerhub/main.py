# File: volunteerhub/main.py
import os
import time
import logging
from typing import Callable
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from volunteerhub.api.v1.api import api_router
from volunteerhub.core.config import settings
from volunteerhub.core.exceptions import WorkflowError
from volunteerhub.db.database import Base, engine, get_db
import volunteerhub.models  # noqa: F401  registers every table on Base.metadata

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

allowed_origins = settings.allowed_origins

# CORS must be registered before the logging middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,  # Must stay False while allow_origins may be ["*"]
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time"],
    max_age=3600,
)


# Request logging middleware (AFTER CORS)
@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log every request with its status and timing"""
    start_time = time.time()
    logger.info(f"{request.method} {request.url.path}")
    if request.query_params:
        logger.debug(f"   Query: {dict(request.query_params)}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"{request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {process_time:.4f}s"
        )
        logger.exception("Full error traceback:")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "message": "Something went wrong on our end",
                "path": request.url.path,
                "method": request.method,
            },
        )


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    """Every failed precondition becomes a structured error body"""
    logger.warning(
        f"{request.method} {request.url.path} rejected: {exc.kind}/{exc.code} - {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API V1 prefix: {settings.API_V1_STR}")
    logger.info(f"Allowed CORS origins: {allowed_origins}")

    # Production schemas are managed by alembic
    if settings.is_development:
        Base.metadata.create_all(bind=engine)
        logger.info("Development database tables ensured")


# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "docs_url": "/docs",
        "status": "running",
    }


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
        status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        database = "unreachable"
        status = "unhealthy"

    return {
        "status": status,
        "environment": settings.ENVIRONMENT,
        "database": database,
        "timestamp": time.time(),
    }


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: Exception):
    """Unknown routes; domain lookups are answered by the WorkflowError handler"""
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "error": "NotFound",
            "code": "route_not_found",
            "message": f"The requested resource {request.url.path} was not found",
        },
    )


# For local development
if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    host = "0.0.0.0" if settings.is_production else "127.0.0.1"

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())
