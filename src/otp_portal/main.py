# File: main.py

from contextlib import asynccontextmanager

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from sentry_sdk.integrations.fastapi import FastApiIntegration

from otp_portal.api.routers.otp import router as otp_router
from otp_portal.common.config.settings import settings
from otp_portal.common.exceptions.exception_handlers import register_exception_handlers
from otp_portal.common.logging.logger import log_error, log_info
from otp_portal.infrastructure.database.redis.redis_client import close_redis_pool, init_redis_pool

# Load environment variables
load_dotenv()

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        environment=settings.ENVIRONMENT,
        send_default_pii=False
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup tasks
    try:
        if settings.OTP_STORE_BACKEND == "redis":
            await init_redis_pool()
        log_info("OTP portal started", extra={"version": app.version, "store": settings.OTP_STORE_BACKEND})
    except Exception as e:
        log_error("Startup failed", extra={"error": str(e)})
        sentry_sdk.capture_exception(e)
        raise

    yield  # Application is running

    # Shutdown tasks
    if settings.OTP_STORE_BACKEND == "redis":
        await close_redis_pool()
    log_info("OTP portal stopped")


app = FastAPI(
    title="OTP Portal API",
    version="1.0.0",
    description="Email one-time password issuing and validation.",
    lifespan=lifespan
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    log_info("Incoming request", extra={"method": request.method, "url": str(request.url)})
    return await call_next(request)


register_exception_handlers(app)
app.include_router(otp_router)
