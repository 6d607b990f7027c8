"""HTTP binding for the schedule tracker.

Exposes the list controller's view state and actions as JSON so any front
end can render the buttons and react to the one-shot signals.
"""
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from .config import Settings, settings as default_settings
from .database.store import ScheduleStore
from .errors import NotFoundError, StorageError
from .viewmodels.quality import QualityController
from .viewmodels.schedule_list import Clock, ScheduleController


class QualityRequest(BaseModel):
    rating: int


def setup_logging(level: str = "INFO") -> None:
    """Configure the loguru sink used by every module."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "{extra[module]} - {message}",
    )
    logger.configure(extra={"module": "tracker"})


def create_app(
    db_path: str | Path | None = None,
    clock: Clock | None = None,
    config: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI app around one store and one list controller."""
    config = config or default_settings
    store = ScheduleStore(db_path if db_path is not None else config.db_path)
    controller = ScheduleController(store, clock=clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.initialize()
        await controller.initialize()
        logger.info("Schedule tracker ready")
        try:
            yield
        finally:
            await controller.close()
            await store.close()

    app = FastAPI(title="Schedule Tracker", lifespan=lifespan)
    app.state.store = store
    app.state.controller = controller

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=500, content={"detail": "storage error"})

    @app.get("/state")
    async def get_state():
        return controller.view_state().to_dict()

    @app.get("/items")
    async def list_items():
        items = await store.get_all_descending()
        return {"items": [item.to_dict() for item in items]}

    @app.post("/start")
    async def start_tracking():
        await controller.on_start_tracking()
        return controller.view_state().to_dict()

    @app.post("/stop")
    async def stop_tracking():
        await controller.on_stop_tracking()
        return controller.view_state().to_dict()

    @app.post("/clear")
    async def clear():
        await controller.on_clear()
        return controller.view_state().to_dict()

    @app.post("/snackbar/ack")
    async def acknowledge_snackbar():
        controller.acknowledge_snackbar()
        return controller.view_state().to_dict()

    @app.post("/navigation/ack")
    async def acknowledge_navigation():
        controller.acknowledge_navigation()
        return controller.view_state().to_dict()

    @app.post("/items/{key}/quality")
    async def set_quality(key: int, body: QualityRequest):
        rated = await QualityController(store, key).on_set_quality(body.rating)
        return rated.to_dict()

    return app


def main() -> None:
    setup_logging("DEBUG" if default_settings.debug else default_settings.log_level)
    app = create_app()
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    main()
