"""
Main FastAPI application
EngPal: writing reviews, quiz generation and chatbot answers powered by Gemini
"""
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from engpal.config import settings
from engpal.api import assignment, chatbot, healthcheck, review
from engpal.exceptions import InvalidRequestError
from engpal.services.assignment_service import AssignmentService
from engpal.services.chatbot_service import ChatbotService
from engpal.services.gemini_service import GeminiService
from engpal.services.review_service import ReviewService
from engpal.utils.cache import build_cache

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="English-learning assistant: writing reviews, quizzes and chatbot answers",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing"""

    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Duration: {duration:.3f}s"
    )

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors gracefully"""

    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "detail": str(exc) if settings.DEBUG else None
        }
    )


# HTTP exception handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Format HTTP exceptions consistently"""

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "http_error",
            "message": exc.detail,
            "status_code": exc.status_code
        }
    )


# Client input errors
@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    """Validation failures carry a message meant for the user"""

    logger.info(f"Rejected {request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=400,
        content={
            "error": "invalid_request",
            "message": str(exc)
        }
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON bodies are client errors, reported as 400"""

    return JSONResponse(
        status_code=400,
        content={
            "error": "invalid_request",
            "message": "Invalid JSON request",
            "detail": str(exc.errors()) if settings.DEBUG else None
        }
    )


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "EngPal API",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/healthcheck"
    }


# Include routers
app.include_router(review.router)
app.include_router(assignment.router)
app.include_router(chatbot.router)
app.include_router(healthcheck.router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Build the Gemini client, caches and services"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    gemini = GeminiService.from_settings(settings)
    app.state.gemini_service = gemini
    app.state.review_service = ReviewService(
        gemini,
        build_cache(settings, "review", settings.REVIEW_CACHE_TTL),
        settings
    )
    app.state.assignment_service = AssignmentService(
        gemini,
        build_cache(settings, "assignment", settings.ASSIGNMENT_CACHE_TTL),
        settings
    )
    app.state.chatbot_service = ChatbotService(gemini, settings)

    logger.info(f"Application startup complete (cache backend: {settings.CACHE_BACKEND})")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down application")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "engpal.main:app",
        host="0.0.0.0",
        port=8080,
        reload=settings.DEBUG
    )
