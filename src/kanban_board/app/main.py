from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.templating import Jinja2Templates

from kanban_board.app.routes import board
from kanban_board.app.middleware.access_log import AccessLogMiddleware
from kanban_board.config import Settings, load_settings
from kanban_board.infra.db.kv_memory import InMemoryKeyValueStore
from kanban_board.infra.db.kv_sqlite import Base, SQLiteKeyValueStore
from kanban_board.infra.db.sqlite import make_sqlite_url, make_engine, make_sessionmaker
from kanban_board.infra.persistence import SnapshotPersistence
from kanban_board.observability.logging import setup_logging
from kanban_board.services.board_service import BoardService
from kanban_board.views.projector import EMPTY_HINT

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
logger = logging.getLogger("kanban.system")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info("system.start", extra={"category": "system", "event": "system.start", "storage": settings.storage})

    app = FastAPI(title="Kanban Board")
    app.add_middleware(AccessLogMiddleware)

    # Static files (CSS/JS)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    # --- storage wiring ---
    engine = None
    if settings.storage == "memory":
        kv = InMemoryKeyValueStore()
    else:
        engine = make_engine(make_sqlite_url(settings.db_path))
        kv = SQLiteKeyValueStore(make_sessionmaker(engine))

    svc = BoardService(SnapshotPersistence(kv, key=settings.store_key))
    app.state.board = svc

    app.include_router(board.router)

    @app.on_event("startup")
    async def _startup():
        if engine is not None:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info(
                "db.ready",
                extra={"category": "system", "event": "db.ready", "db_path": settings.db_path},
            )
        await svc.start()

    @app.on_event("shutdown")
    async def _shutdown():
        if engine is not None:
            await engine.dispose()

    # Pages
    @app.get("/", response_class=HTMLResponse)
    def home(request: Request):
        return templates.TemplateResponse(
            request, "index.html", {"board": svc.board_view(), "empty_hint": EMPTY_HINT},
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
