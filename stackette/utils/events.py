from __future__ import annotations
"""Ultra-lightweight pub/sub **EventBus** used while constructs are built.

Example
-------
```python
from stackette.utils.events import subscribe, ResourceAdded

@subscribe(ResourceAdded)
def _on_resource(evt: ResourceAdded):
    print(f"{evt.logical_id} ({evt.resource_type}) added to {evt.stack}")
```
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Type, TypeVar

__all__ = [
    "Event",
    "ResourceAdded",
    "IngressRuleAdded",
    "StackSynthesized",
    "subscribe",
    "unsubscribe",
    "publish",
]

T = TypeVar("T", bound="Event")
_Handler = Callable[[Any], None]
_REGISTRY: Dict[Type["Event"], List[_Handler]] = {}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, kw_only=True)
class Event:  # noqa: D101 – base event
    ts: datetime = field(default_factory=_now)


# --------------------------------------------------------------------------- #
# Concrete events (extend as needed)
# --------------------------------------------------------------------------- #
@dataclass(slots=True)
class ResourceAdded(Event):
    stack: str
    path: str
    logical_id: str
    resource_type: str


@dataclass(slots=True)
class IngressRuleAdded(Event):
    group: str  # path of the security group (or imported group)
    peer: str
    port: str


@dataclass(slots=True)
class StackSynthesized(Event):
    stack: str
    resource_count: int


# --------------------------------------------------------------------------- #
# API helpers
# --------------------------------------------------------------------------- #

def subscribe(event_type: Type[T]):  # noqa: D401
    """Decorator: register *func* to receive *event_type* events."""

    def _decorator(func: _Handler) -> _Handler:
        _REGISTRY.setdefault(event_type, []).append(func)
        return func

    return _decorator


def unsubscribe(event_type: Type[T], func: _Handler) -> None:
    """Remove *func* from the subscribers of *event_type* (no-op if absent)."""
    handlers = _REGISTRY.get(event_type, [])
    if func in handlers:
        handlers.remove(func)


def publish(evt: Event) -> None:  # noqa: D401
    """Publish an event to all registered subscribers."""
    for func in list(_REGISTRY.get(type(evt), [])):
        try:
            func(evt)
        except Exception as e:  # noqa: BLE001
            # Failure to handle an event must never break construction.
            from stackette.utils.logging import log

            log.warning("event handler %s failed: %s", func.__name__, e)
