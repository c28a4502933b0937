from taskplanner.core.events.domain_events import DomainEvents, domain_events
from taskplanner.core.events.signal import Signal

__all__ = ["DomainEvents", "domain_events", "Signal"]
