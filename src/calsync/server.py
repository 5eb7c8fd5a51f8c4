"""HTTP server exposing upcoming events."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from . import __version__
from .adapters.credential_store import CredentialStore
from .config import Config, load_config
from .workflows import EventSyncWorkflow

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    store: CredentialStore | None = None,
    workflow: EventSyncWorkflow | None = None,
) -> FastAPI:
    """Build the FastAPI app. store and workflow default to ones built from config."""
    config = config or load_config()
    store = store or CredentialStore(config.credential_config())
    workflow = workflow or EventSyncWorkflow(calendar_id=config.calendar_id)

    app = FastAPI(
        title="calsync",
        description="Upcoming events from a Google Calendar",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Plain def: FastAPI runs it in a worker thread since every call blocks.
    @app.get("/api/events")
    def get_events():
        """Upcoming events as the provider returned them."""
        try:
            credential = store.resolve()
            events = workflow.list_upcoming(credential)
        except Exception:
            logger.exception("Error fetching events")
            return PlainTextResponse("Error fetching events", status_code=500)

        logger.info(f"Returning {len(events)} upcoming events")
        return JSONResponse([event.as_json() for event in events])

    return app


def run(config: Config | None = None, host: str | None = None, port: int | None = None) -> None:
    """Serve the app with uvicorn."""
    import uvicorn

    config = config or load_config()
    host = host or config.server_host
    port = port or config.server_port
    logger.info(f"Server is running on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port)
