"""Application entry point for the FitTrack API.

Defines the FastAPI app, request logging middleware, exception handlers and
the routers from the `api` package. The `lifespan` handler creates the
document table on startup.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from api.cycle import router as cycle_router
from api.logs import router as logs_router
from api.nutrition import router as nutrition_router
from api.profile import router as profile_router
from api.stats import router as stats_router
from api.workouts import router as workouts_router
from core.config import CORS_ORIGINS
from core.error_handlers import register_exception_handlers
from core.exceptions import StorageError
from core.logger import get_logger
from core.repository import KeyValueRepository
from database import init_db
from database.deps import get_db
from services.ai_client import ai_client

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage before serving requests."""
    init_db()
    logger.info("FitTrack API started (AI %s)", "enabled" if ai_client.is_configured else "disabled")
    yield


app = FastAPI(title="FitTrack API", version="1.0.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """Return basic health status and storage connectivity.

    Raises:
        StorageError: If the document store cannot be queried.
    """
    try:
        documents = KeyValueRepository(db).keys()
    except Exception as e:
        logger.exception("Health check failed")
        raise StorageError(f"Storage health check failed: {e}")
    return {"status": "healthy", "storage": "connected", "documents": documents}


app.include_router(logs_router)
app.include_router(nutrition_router)
app.include_router(workouts_router)
app.include_router(cycle_router)
app.include_router(profile_router)
app.include_router(stats_router)


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as exc:
        raise RuntimeError(
            "uvicorn is required to run the app. Install with `pip install uvicorn[standard]`. Error: %s" % exc
        )

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
