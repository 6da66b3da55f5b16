import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables before settings-dependent imports
load_dotenv()

from artfolio.config import settings  # noqa: E402

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

from artfolio.api import detection, system, works  # noqa: E402
from artfolio.core.errors import AppError, DetectionError, detection_error_response  # noqa: E402
from artfolio.detection.router import DetectionRouter  # noqa: E402
from artfolio.integrations import firebase, http_client, redis_client  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        firebase.initialize()
    except Exception as e:
        # Works endpoints answer 503 until the database is reachable.
        logger.error(f"[STARTUP] Firebase unavailable: {e}")
    redis_client.initialize()
    await http_client.initialize()

    app.state.detection_router = DetectionRouter()
    available = app.state.detection_router.warm_up()
    logger.info(f"[STARTUP] Detection modalities: {available}")

    yield

    await http_client.close()
    logger.info("[SHUTDOWN] Artfolio API stopped")


app = FastAPI(title="Artfolio API", lifespan=lifespan)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"[ERROR HANDLER] {exc.code} on {request.url.path}: {exc.message}")
    return exc.to_response()


@app.exception_handler(DetectionError)
async def detection_error_handler(request: Request, exc: DetectionError):
    logger.error(f"[ERROR HANDLER] {exc.code} on {request.url.path}: {exc}")
    return detection_error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": f"HTTP_{exc.status_code}", "message": str(exc.detail)}},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": {"code": "BAD_REQUEST", "message": "Invalid request", "details": {"fields": fields}}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[ERROR HANDLER] Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(detection.router)
app.include_router(works.router)
