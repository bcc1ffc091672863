import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.bookings import router as bookings_router
from app.api.v1.weather import router as weather_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("run_id", "slot", "booking_id", "status", "location", "condition", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bookings_router, prefix="/api", tags=["bookings"])
app.include_router(weather_router, prefix="/api", tags=["weather"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in exc.errors()})
    detail = "Missing or malformed fields."
    if any(fields):
        detail = f"Missing or malformed fields: {', '.join(f for f in fields if f)}."
    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"error": type(exc).__name__})
    return JSONResponse(status_code=500, content={"detail": "Unexpected server error."})


@app.get("/")
def index() -> dict[str, str]:
    return {"status": "ok", "message": settings.APP_NAME}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
