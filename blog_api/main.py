import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.db.postgres.base import Base, SessionLocal, engine
from blog_api.db.seed import seed_database
from blog_api.middleware import ResponseHeadersMiddleware
from blog_api.routers import blogs
from blog_api.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ACCESSIBILITY_FEATURES = [
    "Screen reader optimization",
    "Keyboard navigation",
    "High contrast support",
    "Reduced motion support",
    "Focus management",
    "Semantic HTML",
    "ARIA labels",
]


def init_database() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")

    if not settings.SEED_DATABASE:
        return
    try:
        with SessionLocal() as db:
            seed_database(db)
    except Exception as e:
        logger.warning(f"Failed to seed database: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    logger.info(f"{settings.APP_NAME} started, API under {settings.API_PREFIX}")
    yield
    engine.dispose()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    ResponseHeadersMiddleware,
    accessibility_path=f"{settings.API_PREFIX}/accessibility",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "X-Requested-With"],
    expose_headers=["Content-Length", "X-Total-Count", "X-Page", "X-Per-Page"],
    max_age=12 * 3600,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request data", "errors": errors},
    )


app.include_router(blogs.router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION,
        "service": settings.APP_NAME,
    }


@app.get(f"{settings.API_PREFIX}/accessibility")
async def accessibility():
    return {
        "wcag_compliance": "AA",
        "features": ACCESSIBILITY_FEATURES,
        "last_audit": datetime.now(timezone.utc).isoformat(),
    }
