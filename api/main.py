"""
FastAPI application for the TV Catalog API.

CRUD for shows, seasons, episodes, characters and actors, episode links,
query jobs and admin export/import. Every route except /, /health,
/deployment-version and the docs requires x-api-token when API_TOKEN is set.
"""

import time

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import tvcatalog
from api.dependencies import get_config, get_db, get_jobs, require_api_token
from api.exceptions import APIError, api_error_handler, catalog_error_handler, generic_exception_handler
from api.logging_config import generate_request_id, logger, set_request_id
from api.routers import actors, admin, characters, episodes, jobs, seasons, shows
from tvcatalog.config import Config
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import CatalogError

app = FastAPI(
    title="TV Catalog API",
    description="REST API for TV shows, seasons, episodes and their cast",
    version=tvcatalog.__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(CatalogError, catalog_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)


def _allowed_origins() -> list:
    try:
        return get_config().allowed_origins or ["*"]
    except ValueError:
        return ["*"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

SKIP_LOG_PATHS = {"/health", "/", "/deployment-version", "/api/docs", "/api/redoc", "/api/openapi.json"}


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with timing and response status."""
    request_id = generate_request_id(request.headers.get("x-request-id"))
    set_request_id(request_id)

    if request.url.path in SKIP_LOG_PATHS:
        return await call_next(request)

    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"

    logger.info(f"Request started: {request.method} {request.url.path} from {client_ip}")

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"duration={duration_ms:.2f}ms error={str(e)}"
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    log_msg = (
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration_ms:.2f}ms"
    )
    if response.status_code >= 500:
        logger.error(log_msg)
    elif response.status_code >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-ID"] = request_id
    return response


protected = [Depends(require_api_token)]

app.include_router(shows.router, tags=["Shows"], dependencies=protected)
app.include_router(seasons.router, tags=["Seasons"], dependencies=protected)
app.include_router(episodes.router, tags=["Episodes"], dependencies=protected)
app.include_router(characters.router, tags=["Characters"], dependencies=protected)
app.include_router(actors.router, tags=["Actors"], dependencies=protected)
app.include_router(jobs.router, tags=["Query jobs"], dependencies=protected)
app.include_router(admin.router, tags=["Admin"], dependencies=protected)


@app.on_event("shutdown")
def shutdown_jobs():
    # Only stop a job manager that was actually created
    if get_jobs.cache_info().currsize:
        get_jobs().shutdown()


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint points at the docs."""
    return {
        "message": "TV Catalog API",
        "docs": "/api/docs",
        "redoc": "/api/redoc",
    }


@app.get("/health", tags=["Service"])
async def health(db: DatabaseManager = Depends(get_db)):
    """Liveness plus a database ping."""
    if db.ping():
        return {"status": "ok", "database": "ok"}
    return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})


@app.get("/deployment-version", tags=["Service"])
async def deployment_version(config: Config = Depends(get_config)):
    return {
        "appVersion": config.app_version,
        "buildNumber": config.build_number,
        "packageVersion": tvcatalog.__version__,
    }
