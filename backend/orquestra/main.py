import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.logging import configure_logging
from .core.settings import get_settings
from .exceptions import OrquestraError, ValidationFailedError
from .routers import auth, projects

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Orquestra API",
    description="Project, membership and access management for Orquestra",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag every request with an id, echoed back in X-Request-ID."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    logger.debug(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")
    return response


def _field_name(loc) -> str:
    # ("body", "name") -> "name"; ("path", "projectId") -> "projectId"
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


@app.exception_handler(OrquestraError)
async def orquestra_error_handler(request: Request, exc: OrquestraError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = {}
    for error in exc.errors():
        fields.setdefault(_field_name(error.get("loc", ())), error.get("msg", "Invalid value"))
    failure = ValidationFailedError(fields)
    return JSONResponse(status_code=failure.status_code, content=failure.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "details": ""},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        f"[{request_id}] Database error on {request.method} {request.url.path}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": "An unexpected database error occurred"},
    )


# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(projects.router, prefix="/api")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "message": "Orquestra API is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("orquestra.main:app", host="0.0.0.0", port=8000, reload=True)
