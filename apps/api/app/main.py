import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from app.config import allowed_origins, ensure_secure_runtime_settings, settings
from app.db.migration_check import prepare_schema
from app.db.session import SessionLocal, engine
from app.observability import configure_logging, log_event, metrics_store, set_request_id
from app.routers.addresses import router as addresses_router
from app.routers.deliveries import router as deliveries_router
from app.routers.drivers import router as drivers_router
from app.routers.health import router as health_router
from app.routers.metrics import router as metrics_router
from app.routers.public_config import router as public_config_router
from app.services.seed import seed_data


@asynccontextmanager
async def lifespan(_app: FastAPI):
    import app.models  # noqa: F401 (register all SQLAlchemy models)

    if not settings.testing:
        configure_logging(settings.log_level)
    ensure_secure_runtime_settings()
    prepare_schema(engine)
    if settings.app_mode == "demo":
        with SessionLocal() as db:
            seed_data(db)
    yield


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Delivery store backing the Spoedpakket tracking client",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    set_request_id(request_id)

    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start

    response.headers["X-Request-ID"] = request_id
    metrics_store.increment("http_requests_total")
    metrics_store.observe("http_request_duration_seconds", elapsed)
    log_event("http_request", delivery_id=request.path_params.get("delivery_id"))
    return response


app.include_router(health_router)
app.include_router(public_config_router)
app.include_router(addresses_router)
app.include_router(drivers_router)
app.include_router(deliveries_router)
app.include_router(metrics_router)
