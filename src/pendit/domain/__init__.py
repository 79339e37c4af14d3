"""Domain layer for pendit application."""

# Services are imported lazily: the storage layer imports domain entities,
# and the services import the storage layer's mappers.
_SERVICES = {
    "LifecycleService": "pendit.domain.lifecycle",
    "QueryService": "pendit.domain.query",
    "PartyService": "pendit.domain.party",
    "TrackerState": "pendit.domain.state",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
