"""FastAPI application entry point.

This module wires together the API routers, configures middleware and
startup tasks, and exposes the ASGI application object used by the
server.
"""

import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from cyberquiz.routes import (
    auth,
    users,
    quiz,
    questions,
    scores,
    certificates,
    settings,
)
from cyberquiz.database import create_db_and_tables, async_session
from cyberquiz.crud import get_settings, seed_question_bank
from cyberquiz.exceptions import QuizError
from cyberquiz.question_bank import QUESTION_BANK

# Basic logging configuration.  The log level can be controlled with an
# environment variable so deployments can adjust verbosity without code
# changes.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(title="Cyber Awareness Quiz", docs_url=None)


def custom_openapi():
    """Generate an OpenAPI schema that is aware of our `/api` proxy prefix."""

    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    # The reverse proxy serves the API under `/api`; tell Swagger about it.
    openapi_schema["servers"] = [{"url": "/api"}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    """Initialize the database and seed the question bank if it is empty."""

    await create_db_and_tables()
    async with async_session() as session:
        added = await seed_question_bank(session, QUESTION_BANK)
    if added:
        logger.info("Seeded question bank with %s questions", added)


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(quiz.router)
app.include_router(questions.router)
app.include_router(scores.router)
app.include_router(certificates.router)
app.include_router(settings.router)


@app.get("/docs", include_in_schema=False)
async def custom_swagger_ui_html():
    """Serve the interactive docs with the correct API prefix."""

    # The API is served behind a `/api` prefix by the reverse proxy. Point the
    # docs to `/api/openapi.json` so requests are routed correctly.
    return get_swagger_ui_html(openapi_url="/api/openapi.json", title="API Docs")


@app.get("/")
async def read_root():
    async with async_session() as session:
        s = await get_settings(session)
        name = s.site_name
    return {"message": f"Welcome to {name} API"}


@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    """Render quiz domain errors with the shared error envelope."""
    if exc.status_code >= 500:
        logger.warning("%s during request %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": {"code": exc.code, "message": exc.message}},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler that logs the stack trace once."""
    logger.exception("Unhandled error during request %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred",
            }
        },
    )
