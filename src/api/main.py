"""
Admin JSON API - exposes the domain routers over HTTP.
Data lives in the app's console for the lifetime of the process.
"""

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional

from .schemas import (
    EventRequest,
    EventResponse,
    OutcomeResponse,
    ModalStateResponse,
    TransientModalResponse,
    RecordListResponse,
    StatsResponse,
    HealthResponse,
)
from ..core.admin import AdminConsole
from ..core.config import VERSION, debug_enabled
from ..core.errors import NotFound
from ..core.render import column_labels, render_stats
from ..core.router import EventRouter, ModalKind, UiEvent
from ..core.schema import Domain
from util.logging import logger


def get_console(request: Request) -> AdminConsole:
    return request.app.state.console


def _modal_state(router: EventRouter) -> ModalStateResponse:
    transient = []
    for kind in (ModalKind.VIEW, ModalKind.DELETE):
        modal = router.transient(kind)
        if modal is not None:
            transient.append(TransientModalResponse(
                kind=modal.kind,
                record_id=modal.record_id,
                index=modal.index,
                detail=[list(pair) for pair in modal.detail],
            ))
    return ModalStateResponse(create_open=router.create_open, draft=router.draft, transient=transient)


def create_app(console: AdminConsole = None) -> FastAPI:
    app = FastAPI(
        title="Egg Supply Admin API",
        version=VERSION,
        description="Customers, inventory intake and sales entry held in memory",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None
    )
    app.state.console = console if console is not None else AdminConsole()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(console: AdminConsole = Depends(get_console)):
        """Check service health."""
        return HealthResponse(status="healthy", version=VERSION, record_counts=console.record_counts())

    @app.get("/{domain}/records", response_model=RecordListResponse)
    def list_records(domain: Domain, q: Optional[str] = None, console: AdminConsole = Depends(get_console)):
        router = console.router(domain)
        records = router.records(q)
        return RecordListResponse(
            items=[record.to_dict() for record in records],
            rows=[list(row) for row in router.rows(q)],
            columns=column_labels(router.spec),
            total=len(router.store),
        )

    @app.get("/{domain}/records/{index}")
    def get_record(domain: Domain, index: int, console: AdminConsole = Depends(get_console)):
        try:
            return console.router(domain).store.get(index).to_dict()
        except NotFound:
            raise HTTPException(status_code=404, detail=f"No {domain.value} record at index {index}")

    @app.get("/{domain}/stats", response_model=StatsResponse)
    def get_stats(domain: Domain, console: AdminConsole = Depends(get_console)):
        router = console.router(domain)
        stats = router.stats()
        return StatsResponse(
            **stats.to_dict(),
            display=[list(pair) for pair in render_stats(router.spec, stats)],
        )

    @app.get("/{domain}/modals", response_model=ModalStateResponse)
    def get_modals(domain: Domain, console: AdminConsole = Depends(get_console)):
        return _modal_state(console.router(domain))

    @app.post("/{domain}/events", response_model=EventResponse)
    def dispatch_event(domain: Domain, req: EventRequest, console: AdminConsole = Depends(get_console)):
        """Dispatch one UI event and report its outcome and the resulting modal state."""
        event = UiEvent(
            kind=req.kind,
            action=req.action,
            modal=req.modal,
            backdrop=req.backdrop,
            index=req.index,
            form=req.form,
        )
        router = console.router(domain)
        outcome = router.dispatch(event)
        if outcome is not None:
            logger.debug(f"{domain.value} event {event.action}: {outcome.severity.value}")

        return EventResponse(
            outcome=OutcomeResponse(message=outcome.message, severity=outcome.severity) if outcome else None,
            modals=_modal_state(router),
        )

    return app


app = create_app()
