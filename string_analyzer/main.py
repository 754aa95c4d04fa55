from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request, status, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from string_analyzer import __version__
from string_analyzer.api.routes import router
from string_analyzer.config import CORS_ORIGINS, LOG_LEVEL, PORT
from string_analyzer.service import StringAnalyzerService

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(service: Optional[StringAnalyzerService] = None) -> FastAPI:
    """Build the FastAPI application around one shared service"""
    app = FastAPI(
        title="String Analyzer Service",
        description="Analyze, store and query string properties",
        version=__version__
    )
    app.state.service = service if service is not None else StringAnalyzerService()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} - {response.status_code} - "
            f"{datetime.now(timezone.utc).isoformat()}"
        )
        return response

    app.include_router(router, tags=["strings"])

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": "String Analyzer Service",
            "version": __version__,
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string"
            }
        }

    @app.get("/health")
    def health_check(request: Request):
        """Health check endpoint"""
        return {
            "status": "healthy",
            "total_strings": request.app.state.service.repository.count(),
        }

    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        status_code = status.HTTP_400_BAD_REQUEST
        for error in exc.errors():
            field = error['loc'][-1]
            errors[field] = error['msg']
            # A present but non-string "value" is well-formed JSON of the wrong type
            if tuple(error['loc']) == ("body", "value") and error['type'] == "string_type":
                status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

        return JSONResponse(
            status_code=status_code,
            content={
                "error": "Validation failed",
                "details": errors
            }
        )

    # HTTPException handler
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # If detail is already a dict with 'error' key, return as is
        if isinstance(exc.detail, dict) and 'error' in exc.detail:
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.detail
            )
        # Otherwise wrap it
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)}
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error"
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host="0.0.0.0", port=PORT)
