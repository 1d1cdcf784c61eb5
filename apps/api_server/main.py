# apps/api_server/main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Absolute, clean imports
from packages.quant_lib.config import settings
from packages.quant_lib.logging import LogManager
from apps.api_server.core.errors import install_exception_handlers
from apps.api_server.core.limiter import limiter
from apps.api_server.core.utils import mark_request_start
from apps.api_server.dependencies.screener import query_cache
from packages.database.session import dispose_engine
from apps.api_server.routers import screener as screener_router
from apps.api_server.routers import templates as templates_router
from apps.api_server.routers import saved as saved_router
from apps.api_server.routers import cache as cache_router


# Init Logger
log_manager = LogManager(
    service_name="api_server",
    debug=settings.system.debug,
    log_dir=settings.system.log_path,
)
logger = log_manager.get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.system.project_name} starting ({settings.system.environment})")
    yield
    await query_cache.close()
    await dispose_engine()
    logger.info("Shutdown complete.")


# Create App
app = FastAPI(
    title=settings.system.project_name,
    version=settings.system.version,
    debug=settings.system.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.system.allowed_origins_list,  # List of allowed origins
    allow_credentials=True,  # Allow cookies/auth headers
    allow_methods=["*"],  # Allow all methods (GET, POST, PUT, DELETE)
    allow_headers=["*"],  # Allow all headers
)


@app.middleware("http")
async def stamp_request_start(request: Request, call_next):
    # Every response (errors included) reports time from this point
    mark_request_start(request)
    return await call_next(request)


# Attach State & Handlers
app.state.limiter = limiter
install_exception_handlers(app)

# Include Routers with a global prefix
api_prefix = "/api/v1"

app.include_router(screener_router.router, prefix=api_prefix)
app.include_router(templates_router.router, prefix=api_prefix)
app.include_router(saved_router.router, prefix=api_prefix)
app.include_router(cache_router.router, prefix=api_prefix)


@app.get("/", tags=["Health Check"], operation_id="health_check")
def read_root():
    """A simple health check endpoint."""
    logger.info("Health check endpoint was hit.")
    return {"status": "ok", "service": settings.system.project_name}
