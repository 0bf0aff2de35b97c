from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import httpx
import jinja2
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from sitestatus.config.models.app_config_model import AppConfig
from sitestatus.exceptions import TemplateError
from sitestatus.logging.logger import setup_logger
from sitestatus.status_check.models import Site
from sitestatus.status_check.orchestrator import RefreshOrchestrator
from sitestatus.status_check.scheduler import RefreshScheduler
from sitestatus.status_check.store import SiteStore

HOME_TEMPLATE = "home.html"
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

logger = setup_logger(__name__)


def render_status_page(templates: Jinja2Templates, sites: Sequence[Site], updated_at: Optional[datetime]) -> str:
    try:
        template = templates.get_template(HOME_TEMPLATE)
        return template.render(sites=sites, updated_at=updated_at)
    except jinja2.TemplateError as e:
        raise TemplateError(f"{type(e).__name__}: {e}")


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[SiteStore] = None,
    start_scheduler: bool = True,
    client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the status page app; the scheduler runs for the lifetime of the app."""
    config = config or AppConfig()
    store = store if store is not None else SiteStore()
    templates = Jinja2Templates(directory=config.server.templates_dir or str(DEFAULT_TEMPLATES_DIR))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        orchestrator = RefreshOrchestrator(store, config.sitemap, config.probe, client=client)
        scheduler = RefreshScheduler(
            orchestrator,
            interval=config.scheduler.interval_seconds,
            run_on_startup=config.scheduler.run_on_startup,
        )
        app.state.scheduler = scheduler
        if start_scheduler:
            scheduler.start()
        try:
            yield
        finally:
            await scheduler.stop()
            await orchestrator.close()

    app = FastAPI(
        title="Site Status",
        description="Liveness of every URL listed in a sitemap",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.templates = templates

    @app.get("/", response_class=HTMLResponse)
    def site_status(request: Request):
        """Status page for every known site"""
        sites, updated_at = request.app.state.store.snapshot()
        try:
            body = render_status_page(request.app.state.templates, sites, updated_at)
        except TemplateError as e:
            logger.error(f"Status page rendering failed: {e}")
            return PlainTextResponse(f"Error loading templates: {e}", status_code=500)
        return HTMLResponse(body)

    @app.get("/health")
    def health_check(request: Request):
        """Health check endpoint"""
        sites, updated_at = request.app.state.store.snapshot()
        return {
            "status": "healthy",
            "service": "site-status",
            "sites": len(sites),
            "last_refresh": updated_at.isoformat() if updated_at else None,
        }

    return app
