import logging

from fastapi import FastAPI

from salon_packages.api.v1.appointments import router as appointments_router
from salon_packages.api.v1.catalog import router as catalog_router
from salon_packages.api.v1.packages import router as packages_router
from salon_packages.core.config import settings

API_VERSION = "1.0.0"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
CONTEXT_KEYS = ("package_id", "draft_id", "outcome", "reason")


class ContextFormatter(logging.Formatter):
    """Appends the package/draft context passed through ``extra=`` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{line} | {' '.join(context)}" if context else line


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=API_VERSION,
    description="Package definitions and appointment service selection",
)

for router, tag in (
    (packages_router, "packages"),
    (appointments_router, "appointments"),
    (catalog_router, "catalog"),
):
    app.include_router(router, prefix="/api/v1", tags=[tag])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.ENV}
