from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import HTMLResponse, JSONResponse

from streamify.catalog.tmdb import TMDBClient
from streamify.config import load_settings
from streamify.logger import logger, setup_logging
from streamify.presentation import (TEMPLATES_DIR, render_filter_bar,
                                    render_results, templates)
from streamify.search.orchestrator import QueryOrchestrator
from streamify.sessions import SessionStore

WAIT_TIMEOUT = 15.0

settings = load_settings()

app = FastAPI()
app.mount("/static", StaticFiles(directory=str(TEMPLATES_DIR / "static")), name="static")
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)


class QueryParams(BaseModel):
    search_text: Optional[str] = None
    genre: Optional[str] = None
    rating: Optional[str] = None


@app.on_event("startup")
async def startup_event():
    # a catalog or settings placed on app.state beforehand take precedence
    if getattr(app.state, "settings", None) is None:
        app.state.settings = settings
    config = app.state.settings
    setup_logging(config.log_level, config.log_format)
    if getattr(app.state, "catalog", None) is None:
        app.state.catalog = TMDBClient(
            config.tmdb_api_key,
            base_url=config.tmdb_base_url,
            timeout=config.tmdb_timeout,
        )
    app.state.sessions = SessionStore(config.max_sessions, config.session_ttl)


@app.on_event("shutdown")
async def shutdown_event():
    app.state.sessions.close_all()
    await app.state.catalog.aclose()
    app.state.catalog = None


def get_orchestrator(request: Request) -> QueryOrchestrator:
    session_id = request.session.get("session_id")
    if session_id is None:
        session_id = uuid4().hex
        request.session["session_id"] = session_id

    sessions = request.app.state.sessions
    orchestrator = sessions.get(session_id)
    if orchestrator is None:
        orchestrator = QueryOrchestrator(
            request.app.state.catalog, request.app.state.settings.debounce_seconds
        )
        sessions.add(session_id, orchestrator)
        logger.info(f"new browsing session {session_id}")
        orchestrator.start()
    return orchestrator


@app.get("/")
async def home(request: Request):
    view = get_orchestrator(request).state
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "search_text": view.query.search_text,
            "filter_bar": render_filter_bar(view.genres, view.query.genre, view.query.rating),
            "results": render_results(view),
        },
    )


@app.post("/query")
async def update_query(request: Request, body: QueryParams) -> JSONResponse:
    orchestrator = get_orchestrator(request)
    try:
        if body.search_text is not None:
            orchestrator.set_search_text(body.search_text)
        if body.genre is not None:
            orchestrator.set_genre(body.genre)
        if body.rating is not None:
            orchestrator.set_rating(body.rating)
    except ValueError as exc:
        logger.error(f"rejected query change {body}: {exc}")
        return JSONResponse({"error": str(exc)}, status_code=400)
    return JSONResponse({"status": "ok"})


@app.get("/results")
async def results(request: Request, wait: bool = False) -> HTMLResponse:
    orchestrator = get_orchestrator(request)
    if wait and not await orchestrator.wait_idle(WAIT_TIMEOUT):
        logger.warning("results requested before the query settled")
    return HTMLResponse(render_results(orchestrator.state))


@app.post("/retry")
async def retry(request: Request) -> HTMLResponse:
    orchestrator = get_orchestrator(request)
    await orchestrator.retry()
    return HTMLResponse(render_results(orchestrator.state))


@app.get("/genres")
async def genres(request: Request) -> JSONResponse:
    view = get_orchestrator(request).state
    return JSONResponse([genre.model_dump() for genre in view.genres])
