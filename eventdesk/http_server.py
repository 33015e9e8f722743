"""HTTP server for the event admin API."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventdesk import __version__
from eventdesk.database.repositories import BaseRepository, InMemoryEventStore
from eventdesk.handlers import EventRequestHandler, HandlerResult
from eventdesk.models.config import EventDeskConfig
from eventdesk.models.event import Event
from eventdesk.notifications import NotificationDispatcher, build_dispatcher

logger = logging.getLogger(__name__)


def build_router(handler: EventRequestHandler, dispatcher: NotificationDispatcher) -> APIRouter:
    """Create the event routes on top of a request handler."""
    router = APIRouter(tags=["events"])

    def respond(result: HandlerResult, background_tasks: BackgroundTasks) -> JSONResponse:
        # Dispatch runs after the response is sent and is never awaited here
        if result.notification is not None:
            event, action = result.notification
            background_tasks.add_task(dispatcher.notify, event, action)
        return JSONResponse(status_code=result.status_code, content=result.body)

    @router.post("/events", status_code=201)
    async def create_event(background_tasks: BackgroundTasks, payload: Dict[str, Any] = Body(...)):
        """Create an event."""
        return respond(await handler.create(payload), background_tasks)

    @router.get("/events")
    async def list_events(background_tasks: BackgroundTasks):
        """List all events."""
        return respond(await handler.list_events(), background_tasks)

    @router.get("/events/{event_id}")
    async def get_event(event_id: str, background_tasks: BackgroundTasks):
        """Fetch a single event."""
        return respond(await handler.get(event_id), background_tasks)

    @router.put("/events/{event_id}")
    async def update_event(
        event_id: str, background_tasks: BackgroundTasks, payload: Dict[str, Any] = Body(...)
    ):
        """Update some or all fields of an event."""
        return respond(await handler.update(event_id, payload), background_tasks)

    @router.delete("/events/{event_id}")
    async def delete_event(event_id: str, background_tasks: BackgroundTasks):
        """Delete an event."""
        return respond(await handler.delete(event_id), background_tasks)

    return router


def create_app(
    config: Optional[EventDeskConfig] = None,
    store: Optional[BaseRepository[Event]] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """Build the FastAPI application.

    The event routes are mounted under ``config.api_prefix`` so the same
    handlers serve a standalone deployment (``/api``) as well as a
    function-style deployment mounted under any other path.
    """
    config = config or EventDeskConfig()
    store = store if store is not None else InMemoryEventStore()
    dispatcher = dispatcher or build_dispatcher(config)
    handler = EventRequestHandler(store)
    prefix = config.normalized_api_prefix()

    app = FastAPI(
        title="Event Admin API",
        description="Event scheduling admin service with email and calendar notifications",
        version=__version__,
    )
    app.state.config = config
    app.state.store = store
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(build_router(handler, dispatcher), prefix=prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Event Admin API",
            "version": __version__,
            "endpoints": {
                "events": f"{prefix}/events",
                "event": f"{prefix}/events/{{id}}",
            },
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report unparseable request bodies in the API's error format."""
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            message = "Malformed JSON in request body."
        else:
            message = "Request body must be a JSON object."
        logger.info(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"message": message})

    logger.info(f"Event routes mounted at {prefix or '/'}")
    return app


app = create_app()
