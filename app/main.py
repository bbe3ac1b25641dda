import logging
import math
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.llm.errors import GatewayError, RateLimitExceededError
from app.routers import ai, health
from app.services.gateway import GatewayService

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("app.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    gateway = getattr(app.state, "gateway", None)
    owned = gateway is None
    if owned:
        gateway = GatewayService.from_settings(settings)
        app.state.gateway = gateway
    logging.getLogger("uvicorn.error").info(
        "llm:gateway ready models=%s active=%s", gateway.models(), gateway.active_model
    )
    try:
        yield
    finally:
        if owned:
            await gateway.aclose()
            del app.state.gateway


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins if origins != ["*"] else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(health.router, prefix=prefix)
app.include_router(ai.router, prefix=prefix)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(math.ceil(exc.retry_after_s))}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.code}, headers=headers)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV}
