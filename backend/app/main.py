"""FastAPI application entry point"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from backend.app.core.config import settings
from backend.app.core.database import init_db
from backend.app.core.logging import setup_logging, get_logger
from backend.app.core.middleware import RequestContextMiddleware
from backend.app.core.exceptions import CandidateIntakeException
from backend.app.api import candidates

# Setup logging
setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## Candidate Intake

Registers candidates together with their education history, work experience
and resume reference.

* Submissions are validated field by field before anything is written
* The candidate is saved first, then each dependent record in order
* Submissions carrying an `id` edit an existing candidate
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    openapi_tags=[
        {
            "name": "Candidates",
            "description": "Candidate registration and retrieval"
        },
    ],
)

app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(CandidateIntakeException)
async def candidate_intake_exception_handler(request: Request, exc: CandidateIntakeException):
    """Handle service exceptions with the status code they carry"""
    request_id = getattr(request.state, "request_id", "unknown")

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"Candidate intake exception: {exc.message}",
        extra={
            "request_id": request_id,
            "status_code": exc.status_code,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details,
            "request_id": request_id,
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        f"Request validation error: {exc.errors()}",
        extra={"request_id": request_id}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "details": jsonable_encoder(exc.errors()),
            "request_id": request_id,
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": {"message": "An unexpected error occurred"},
            "request_id": request_id,
        }
    )


@app.on_event("startup")
async def startup_event():
    """Application startup tasks"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown tasks"""
    logger.info("Shutting down application")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


app.include_router(
    candidates.router,
    prefix=f"{settings.API_V1_PREFIX}/candidates",
    tags=["Candidates"]
)
