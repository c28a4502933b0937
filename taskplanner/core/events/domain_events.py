"""Project-level notifications raised after tasks or their computed dates change."""
from taskplanner.core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        # payload: project id
        self.tasks_changed: Signal[str] = Signal()
        self.schedule_changed: Signal[str] = Signal()


domain_events = DomainEvents()
