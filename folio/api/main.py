import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from folio import __version__
from folio.api.deps import get_settings
from folio.api.routes import health, portable_text
from folio.rules.loader import load_rules
from folio.rules.models import Rules

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    if app.state.rules is None:
        settings = get_settings()

        # Load rules on startup (fail-fast)
        try:
            app.state.rules = load_rules(settings.rules_path)
        except (FileNotFoundError, ValueError):
            logger.critical("Rules load failed from %s", settings.rules_path, exc_info=True)
            raise
        logger.info("Rules loaded from %s", settings.rules_path)

    yield


def create_app(rules: Rules | None = None) -> FastAPI:
    """Build the API app; rules given here skip loading from disk."""
    app = FastAPI(
        title="Folio Portable Text API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.rules = rules

    app.include_router(health.router, tags=["Health"])
    app.include_router(portable_text.router, prefix="/api/portable-text", tags=["Portable Text"])

    return app


app = create_app()

