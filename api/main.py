import logging
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from addresses import router as addresses_router  # noqa: E402
from auth import dependencies as auth_dependencies  # noqa: E402
from core import config, db, errors  # noqa: E402
from expense_types import router as types_router  # noqa: E402
from expenses import router as expenses_router  # noqa: E402
from service_providers import router as service_providers_router  # noqa: E402
from users import router as users_router  # noqa: E402

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("home_manager")


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Home Manager API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    if config.is_production():
        logger.info("%s %s %s", request.method, request.url.path, response.status_code)
    else:
        logger.info(
            "request method=%s path=%s status=%s duration_ms=%.1f",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
    return response


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    return response


protected = [Depends(auth_dependencies.require_api_key)]

app.include_router(users_router.router, prefix="/api", tags=["users"], dependencies=protected)
app.include_router(expenses_router.router, prefix="/api", tags=["expenses"], dependencies=protected)
app.include_router(
    service_providers_router.router,
    prefix="/api",
    tags=["serviceproviders"],
    dependencies=protected,
)
app.include_router(addresses_router.router, prefix="/api", tags=["addresses"], dependencies=protected)
app.include_router(types_router.router, prefix="/api", tags=["types"], dependencies=protected)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> str:
    return "Welcome to Home Manager API"
