import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from imei_registry.db.db import engine
from imei_registry.db.report_store import ReportStore
from imei_registry.routers import auth, reports
from imei_registry.utils import settings
from imei_registry.utils.errors import RegistryError
from imei_registry.utils.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema problems must not keep the API from starting
    app.state.degraded = not ReportStore.initialize_schema(engine)
    if app.state.degraded:
        logger.error("Starting in degraded mode: database schema is not ready")

    if not settings.ADMIN_PASSWORD:
        logger.error("ADMIN_PASSWORD is not set; all admin logins will be rejected")

    yield


app = FastAPI(title="IMEI Registry API", lifespan=lifespan)
app.state.degraded = False

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error responses are always {"error": ...}
@app.exception_handler(RegistryError)
async def registry_error_handler(request: Request, exc: RegistryError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
        message = exc.public_message
    else:
        message = exc.message

    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


# Register routers
app.include_router(reports.router, prefix="/api", tags=["Reports"])
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])


@app.get("/api/health")
def health():
    return {"ok": True, "degraded": app.state.degraded}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
