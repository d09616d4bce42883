"""
Admin console - composes one event router (and record store) per domain.
"""

from typing import Dict, Optional

from util.logging import logger

from .domains import all_domain_specs
from .router import EventRouter, Outcome, UiEvent
from .schema import Domain


class AdminConsole:
    """Owns the customers, inventory and sales routers for one session.

    Each domain keeps its own store; nothing is shared between domains.
    """

    def __init__(self, today=None):
        self.routers: Dict[Domain, EventRouter] = {
            spec.domain: EventRouter(spec, today=today) for spec in all_domain_specs()
        }
        logger.log_operation("console.start", "ready", {"domains": [d.value for d in self.routers]})

    def router(self, domain) -> EventRouter:
        return self.routers[Domain(domain)]

    def dispatch(self, domain, event: UiEvent) -> Optional[Outcome]:
        return self.router(domain).dispatch(event)

    def record_counts(self) -> Dict[str, int]:
        return {domain.value: len(router.store) for domain, router in self.routers.items()}
