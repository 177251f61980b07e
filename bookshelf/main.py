import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy import text

from bookshelf.api.v1.router import api_router
from bookshelf.core.database import Base, SessionLocal, engine
from bookshelf.core.exceptions import BookshelfError
from bookshelf.core.settings import settings
from bookshelf.utils.date_utils import now


# Configure logging
def setup_logging():
    """Configure logging for the application"""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    # Create logs directory if it doesn't exist
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(exist_ok=True)

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_dir / "app.log", encoding="utf-8"),
        ],
    )

    # Set specific loggers to appropriate levels
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


# Setup logging before creating the app
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger = logging.getLogger(__name__)

    # Startup
    logger.info("Bookshelf API starting up...")

    import bookshelf.models  # noqa: F401  registers every table on Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")

    yield

    # Shutdown
    logger.info("Bookshelf API shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookshelfError)
async def bookshelf_exception_handler(request: Request, exc: BookshelfError):
    logger = logging.getLogger(__name__)
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{exc.status_code} {exc.code} on {request.method} {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_response()),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger = logging.getLogger(__name__)
    logger.info(f"422 Validation Error on {request.method} {request.url.path}")
    logger.debug(f"Validation errors: {exc.errors()}")

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid input",
            "code": "validation_failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    logger = logging.getLogger(__name__)
    logger.info(f"Pydantic Validation Error on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid input",
            "code": "validation_failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint for monitoring and load balancers"""
    db = SessionLocal()
    try:
        # Check database connection
        db.execute(text("SELECT 1"))
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": now().isoformat(),
                "error": str(e),
                "database": "disconnected",
            },
        )
    finally:
        db.close()

    return {
        "status": "healthy",
        "timestamp": now().isoformat(),
        "version": settings.VERSION,
        "database": "connected",
        "environment": settings.ENVIRONMENT,
    }
