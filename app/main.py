import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables at the very beginning
load_dotenv()

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from app.api import detection, history  # noqa: E402
from app.config import settings  # noqa: E402
from app.integrations import http_client, supabase_client  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    await http_client.initialize()
    supabase_client.initialize()

    if not settings.gemini_api_key:
        logger.warning("[STARTUP] GEMINI_API_KEY is not set; /api/detect will fail until it is")

    yield

    await http_client.close()
    logger.info("[SHUTDOWN] Detection proxy stopped")


app = FastAPI(title="Deepfake Detection Proxy", lifespan=lifespan)


# ---- Global Exception Handler for CORS ----
# HTTP errors must carry CORS headers too, otherwise the browser hides the
# JSON body (e.g. the per-endpoint Gemini diagnostics) behind a network error.
@app.exception_handler(StarletteHTTPException)
async def custom_http_exception_handler(request: Request, exc: StarletteHTTPException):
    headers = getattr(exc, "headers", None)
    if headers is None:
        headers = {}

    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Allow-Credentials"] = "true"
    headers["Access-Control-Allow-Methods"] = "*"
    headers["Access-Control-Allow-Headers"] = "*"

    # Drain the incoming request body so rejecting a large upload early does
    # not drop the connection mid-stream.
    try:
        async for _ in request.stream():
            pass
    except Exception as e:
        logger.warning(f"Error draining request stream in exception handler: {e}")

    response_data = {"detail": exc.detail}
    logger.info(f"[ERROR HANDLER] Returning {exc.status_code} to client. Body: {response_data}")

    return JSONResponse(
        status_code=exc.status_code,
        content=response_data,
        headers=headers
    )


# ---- CORS ----
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(detection.router)
app.include_router(history.router)


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "gemini_configured": bool(settings.gemini_api_key),
        "history_enabled": settings.supabase_enable and supabase_client.client is not None,
    }


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.getenv("PORT", "4000"))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, log_level="info")
