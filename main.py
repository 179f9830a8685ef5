# SchoolDesk - student, teacher, class and enrollment records
# Local JSON snapshot store behind a small HTTP API.
import locale
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from database.store import SnapshotStore
from errors import SchoolDeskError
from records.repository import Repository
from server.data_api import router as data_router
from server.records_api import router as records_router
from server.reports_api import router as reports_router

logger = logging.getLogger(__name__)


def apply_collation_locale(name: str) -> str:
    """Set LC_COLLATE for sorting. An unknown locale keeps the current one."""
    try:
        return locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        logger.warning("Collation locale %r is not available, keeping %r", name, locale.setlocale(locale.LC_COLLATE))
        return locale.setlocale(locale.LC_COLLATE)


async def schooldesk_error_handler(request: Request, exc: SchoolDeskError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(level=settings.log_level.upper())
        apply_collation_locale(settings.collation_locale)
        store = SnapshotStore.from_settings(settings)
        app.state.repository = Repository.open(store)
        logger.info("SchoolDesk ready: %s", app.state.repository.snapshot.counts())
        yield
        store.dispose()

    app = FastAPI(
        title="SchoolDesk",
        description="Students, teachers, classes and enrollments with JSON/CSV import and export",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.add_exception_handler(SchoolDeskError, schooldesk_error_handler)
    app.include_router(records_router)
    app.include_router(reports_router)
    app.include_router(data_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.app_version}

    return app


app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn
    host = os.environ.get("UVICORN_HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("main:app", host=host, port=port, reload=False)
