import logging

import uvicorn
from fastapi import FastAPI

from config import build_cors, configure_logging, get_settings
from middleware.request_id import RequestIDMiddleware
from middleware.timing import TimingMiddleware
from validation_router import router as validation_router

# -----------------------------------------------------------------------------
# App & Logging
# -----------------------------------------------------------------------------
settings = get_settings()
configure_logging(settings)
logger = logging.getLogger("main_app")

app = FastAPI(title=settings.meta.app_name, version=settings.meta.version)
app = build_cors(settings)(app)

# Timing is added first so RequestID wraps it and its log lines carry the id.
app.add_middleware(TimingMiddleware, slow_ms=settings.logging.slow_request_threshold_ms)
app.add_middleware(RequestIDMiddleware)

app.include_router(validation_router)


@app.get("/")
async def root():
    return {"status": "ok", "service": settings.meta.app_name, "environment": settings.meta.environment}


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.fastapi.host,
        port=settings.fastapi.port,
        reload=settings.fastapi.reload,
        workers=settings.fastapi.workers,
    )
