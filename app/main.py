import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import models  # noqa: F401  (registers tables with Base)
from .config import ALLOWED_ORIGINS, ENVIRONMENT
from .database import Base, engine
from .domain.accounts.router import router as accounts_router
from .domain.admin.router import router as admin_router
from .domain.analytics.router import router as analytics_router
from .domain.billing.router import router as billing_router
from .domain.checklists.router import router as checklists_router
from .domain.clients.router import router as clients_router
from .domain.quotes.router import router as quotes_router
from .domain.scheduling.router import router as scheduling_router
from .domain.sharing.router import public_router as public_quotes_router
from .domain.sharing.router import router as share_links_router
from .domain.team.router import router as team_router
from .shared.errors import AppError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Application starting up ({ENVIRONMENT})...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        # Another worker may have created the tables first
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="CleanlyQuote API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing input is a 400 with per-field messages"""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error for {request.url.path}: {details}")
    message = details[0]["message"] if details else "Invalid input"
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "code": "INVALID_INPUT", "message": message, "details": details},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # Store errors are never echoed to callers
    logger.error(f"❌ Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": "INTERNAL_ERROR", "message": "Something went wrong"},
    )


origins = [origin.strip() for origin in ALLOWED_ORIGINS.split(",") if origin.strip()]
logger.info(f"CORS allowed origins: {origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(accounts_router, prefix=API_PREFIX)
app.include_router(quotes_router, prefix=API_PREFIX)
app.include_router(share_links_router, prefix=API_PREFIX)
app.include_router(public_quotes_router, prefix=API_PREFIX)
app.include_router(scheduling_router, prefix=API_PREFIX)
app.include_router(clients_router, prefix=API_PREFIX)
app.include_router(team_router, prefix=API_PREFIX)
app.include_router(analytics_router, prefix=API_PREFIX)
app.include_router(checklists_router, prefix=API_PREFIX)
app.include_router(billing_router, prefix=API_PREFIX)
app.include_router(admin_router, prefix=API_PREFIX)


@app.get("/")
def root():
    return {"message": "CleanlyQuote API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
