from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autoapply.api import applications, apply, auth, dashboard, jobs, linkedin, profile, resumes, search_criteria
from autoapply.bootstrap import run_startup_tasks
from autoapply.config import settings
from autoapply.database import engine
from autoapply.logging_config import configure_logging
from autoapply.middleware import RequestIdMiddleware
from autoapply import models  # noqa: F401


configure_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location)
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": _format_validation_errors(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
def on_startup() -> None:
    settings.ensure_directories()
    run_startup_tasks(engine)
    logger.info("app_started", environment=settings.environment)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(profile.router, prefix="/api/user", tags=["profile"])
app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(apply.router, prefix="/api", tags=["applications"])
app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])
app.include_router(search_criteria.router, prefix="/api/search-criteria", tags=["search_criteria"])
app.include_router(linkedin.router, prefix="/api/linkedin", tags=["linkedin"])
