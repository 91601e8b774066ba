import argparse
import logging
import pathlib
from datetime import datetime, timezone
from urllib.parse import quote

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session
import uvicorn

from . import content
from .content import ContentNotFound
from .db import get_db, init_db
from .negotiation import FULL_PAGE_TEMPLATE, RequestContext, request_context
from .schemas import ResultBag
from .settings import Settings, settings as default_settings
from .store import ContentStore, SqlContentStore, StoreError
from .templates import render

logger = logging.getLogger(__name__)

router = APIRouter()

def get_store(db: Session = Depends(get_db)) -> ContentStore:
    return SqlContentStore(db)

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def _respond(request: Request, ctx: RequestContext, bag: ResultBag):
    return render(request, ctx.template_for(bag.kind), bag.context())

@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "pong"

@router.get("/healthz")
def healthz():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}

@router.get("/", response_class=HTMLResponse)
def home(request: Request,
         ctx: RequestContext = Depends(request_context),
         store: ContentStore = Depends(get_store),
         cfg: Settings = Depends(get_settings)):
    return _respond(request, ctx, content.home(store, ctx.offset, cfg.SITE_TITLE))

@router.get("/post/{key:path}", response_class=HTMLResponse)
def post(key: str, request: Request,
         ctx: RequestContext = Depends(request_context),
         store: ContentStore = Depends(get_store)):
    return _respond(request, ctx, content.post(store, key))

@router.get("/search/{query:path}", response_class=HTMLResponse)
def search(query: str, request: Request,
           q: str | None = Query(None),
           ctx: RequestContext = Depends(request_context),
           store: ContentStore = Depends(get_store)):
    # Plain form submission: /search/?q=terms -> /search/:terms
    if not query and q and q.strip():
        return RedirectResponse(f"/search/:{quote(q.strip())}", status_code=303)
    return _respond(request, ctx, content.search(store, query, ctx.offset))

@router.get("/channel/{key:path}", response_class=HTMLResponse)
def channel(key: str, request: Request,
            ctx: RequestContext = Depends(request_context),
            store: ContentStore = Depends(get_store)):
    return _respond(request, ctx, content.channel(store, key, ctx.offset))

def create_app(cfg: Settings | None = None, create_tables: bool = True) -> FastAPI:
    cfg = cfg or default_settings
    app = FastAPI(title=cfg.SITE_TITLE)
    app.state.settings = cfg
    app.include_router(router)
    app.mount("/static", StaticFiles(directory=str(pathlib.Path(__file__).parent / "static")), name="static")

    @app.exception_handler(ContentNotFound)
    def not_found(request: Request, exc: ContentNotFound):
        return render(request, FULL_PAGE_TEMPLATE, {"message": exc.message, "title": cfg.SITE_TITLE}, status_code=404)

    @app.exception_handler(StoreError)
    def store_failed(request: Request, exc: StoreError):
        logger.error("content store failure on %s", request.url.path, exc_info=exc)
        return render(request, FULL_PAGE_TEMPLATE,
                      {"message": "Content is temporarily unavailable", "title": cfg.SITE_TITLE},
                      status_code=500)

    if create_tables:
        @app.on_event("startup")
        def startup_event():
            init_db()

    return app

app = create_app()

def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

def run(argv=None):
    parser = argparse.ArgumentParser(prog="dagobah", description="Serve all feeds in the content store.")
    parser.add_argument("--host", default=default_settings.API_HOST)
    parser.add_argument("--port", type=int, default=default_settings.API_PORT, help="Port to run the server on")
    args = parser.parse_args(argv)

    configure_logging(default_settings.LOG_LEVEL)
    logger.info("Running on %s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=default_settings.LOG_LEVEL.lower())

if __name__ == "__main__":
    run()
