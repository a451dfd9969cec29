import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gradedraft.api import draft, leagues
from gradedraft.config import load_settings
from gradedraft.data.players import PlayerCatalog
from gradedraft.exceptions import DraftError
from gradedraft.models.league_store import LeagueStore
from gradedraft.services.draft_controller import DraftController
from gradedraft.services.pick_mutex import PickMutex
from gradedraft.services.timeout_sweeper import TimeoutSweeper

logger = logging.getLogger(__name__)


def configure_logging(level="INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_catalog(settings):
    if not settings.players_csv:
        return PlayerCatalog.empty()
    catalog = PlayerCatalog.from_csv(settings.players_csv)
    logger.info("Loaded %d players from %s", len(catalog), settings.players_csv)
    return catalog


async def draft_error_handler(request: Request, exc: DraftError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.kind, "detail": str(exc)},
    )


def create_app(settings=None, store=None, controller=None, catalog=None) -> FastAPI:
    settings = settings or load_settings()
    store = store or LeagueStore()
    controller = controller or DraftController(store, PickMutex())
    catalog = catalog if catalog is not None else load_catalog(settings)
    sweeper = TimeoutSweeper(
        store,
        controller,
        interval=settings.sweep_interval,
        grace=settings.sweep_grace,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.sweeper_enabled:
            sweeper.start()
        try:
            yield
        finally:
            await sweeper.stop()

    app = FastAPI(title="gradedraft", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.controller = controller
    app.state.catalog = catalog
    app.state.sweeper = sweeper

    app.add_exception_handler(DraftError, draft_error_handler)
    app.include_router(leagues.router)
    app.include_router(draft.router)

    return app


app = create_app()
