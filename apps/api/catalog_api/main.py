from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from catalog_api.api.errors import register_exception_handlers
from catalog_api.api.routes import router as api_router
from catalog_api.business.catalog.service import ProductService
from catalog_api.core.config import get_settings
from catalog_api.logging import configure_logging
from catalog_api.middleware.request_tracking import CorrelationIdMiddleware, RequestLoggingMiddleware
from catalog_api.otel import correlation_request_hook, setup_otel


configure_logging()
logger = logging.getLogger("catalog_api.lifecycle")
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("system_started", extra={"operation": "startup"})
    yield
    logger.info("system_stopped", extra={"operation": "shutdown"})


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
app.state.product_service = ProductService()
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)
register_exception_handlers(app)
app.include_router(api_router)

setup_otel(settings)

if not getattr(app, "_is_instrumented_by_opentelemetry", False):
    FastAPIInstrumentor().instrument_app(app, server_request_hook=correlation_request_hook)
