"""
Hooks component port definitions.

ElementPort and TimerPort describe the slice of the browser the hooks
touch, so the lifecycle can run against an in-memory DOM.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .models import DomEvent

Listener = Callable[[DomEvent], None]


class ElementPort(Protocol):
    """Minimal DOM element interface."""

    tag: str
    value: str

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def query_selector(self, selector: str) -> ElementPort | None:
        """First matching descendant, or None."""
        ...

    def query_selector_all(self, selector: str) -> list[ElementPort]: ...

    def add_event_listener(self, event_type: str, listener: Listener) -> None: ...

    def remove_event_listener(self, event_type: str, listener: Listener) -> None: ...

    def dispatch_event(self, event: DomEvent) -> bool:
        """Dispatch event. Returns False if a listener prevented default."""
        ...

    def add_class(self, *names: str) -> None: ...

    def remove(self) -> None:
        """Detach the element from its parent."""
        ...

    @property
    def is_connected(self) -> bool: ...


class TimerPort(Protocol):
    """setTimeout / clearTimeout."""

    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> int: ...

    def clear_timeout(self, handle: int) -> None: ...


@runtime_checkable
class LifecycleHook(Protocol):
    """
    A client behavior bound to one mounted element.

    `on_update` and `on_unmount` are optional; the runtime checks for them
    with getattr.
    """

    def on_mount(self, element: ElementPort) -> None: ...
