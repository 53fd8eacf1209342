import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.v1.bookings import router as bookings_router
from app.core.config import settings
from app.infrastructure.store.json_store import JsonBookingRepository
from app.wiring.dependencies import get_booking_repository


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "date", "time", "duration", "conflict_id", "path", "reason"):
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


@asynccontextmanager
async def lifespan(app: FastAPI):
    repository = get_booking_repository()
    if isinstance(repository, JsonBookingRepository):
        repository.ensure_file()
        logger.info("Bookings stored in %s", repository.file_path)
    yield


app = FastAPI(title="Meeting Calendar", version="1.0.0", lifespan=lifespan)

app.include_router(bookings_router, prefix="/api", tags=["bookings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
