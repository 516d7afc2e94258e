from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import logging

from .api.v1.auth import router as auth_router
from .api.v1.doctor import router as doctor_router
from .api.v1.navigation import router as navigation_router
from .api.v1.patient_portal import router as patient_portal_router
from .api.v1.veterinary import router as veterinary_router
from .core.config import settings
from .core.database import describe_backend
from .core.security import Role
from .services.auth_service import AuthClient

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Share one auth client per process; close it on shutdown."""
    logger.info("Starting NabhaArogya...")
    logger.info(f"Using {describe_backend()} database")
    app.state.auth_client = AuthClient()
    logger.info("Application startup complete")
    yield
    logger.info("Shutting down NabhaArogya...")
    await app.state.auth_client.aclose()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Doctor and patient portal for rural healthcare and veterinary services",
    openapi_url="/api/v1/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if not settings.TESTING:
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=["localhost", "127.0.0.1", "*.localhost", "testserver"]
    )


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    content = {
        "error": HTTPStatus(exc.status_code).phrase,
        "message": exc.detail,
        "path": str(request.url.path),
    }
    if exc.status_code == 401:
        # Client goes back to role selection
        content["redirect"] = "/"
    elif exc.status_code == 404 and exc.detail == "Not Found":
        content["message"] = "The requested resource was not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report the first failing rule of each field."""
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"][1:]] or [str(error["loc"][0])]
        field = ".".join(loc)
        if field in errors:
            continue
        ctx = error.get("ctx") or {}
        if error["type"] == "value_error" and "error" in ctx:
            errors[field] = str(ctx["error"])
        else:
            errors[field] = error["msg"]
    return JSONResponse(
        status_code=422,
        content={"error": "Validation Error", "errors": errors},
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred"
        }
    )


# Include routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(navigation_router, prefix="/api/v1")
app.include_router(doctor_router, prefix="/api/v1")
app.include_router(patient_portal_router, prefix="/api/v1")
app.include_router(veterinary_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION
    }


@app.get("/")
async def root():
    """Role selection: which portal to sign in or sign up to."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "roles": [
            {
                "role": Role.DOCTOR.value,
                "title": "Doctor",
                "sign_in": "/api/v1/auth/sign-in",
                "sign_up": "/api/v1/auth/sign-up/doctor",
            },
            {
                "role": Role.PATIENT.value,
                "title": "Patient",
                "sign_in": "/api/v1/auth/sign-in",
                "sign_up": "/api/v1/auth/sign-up/patient",
            },
        ],
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "arogya.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
