"""
Hooks component - Client hooks bridging server-driven DOM updates to
native browser events.

One hook instance exists per mounted element and owns every listener and
timer it creates. `on_unmount` releases all of them.

Key behaviors:
- ProductPickerHook: picker `change` -> hidden input value + `input` event
- FlashAutoDismissHook: fade then remove after a delay or on close
"""

from __future__ import annotations

import logging

from .models import DomEvent, HookRegistration
from .ports import ElementPort, Listener, TimerPort

logger = logging.getLogger(__name__)

PICKER_SELECTOR = "odyssey-product-picker"
HIDDEN_INPUT_SELECTOR = 'input[type="hidden"]'

DEFAULT_DISMISS_AFTER_MS = 5000
FADE_DURATION_MS = 300
FADE_CLASSES = ("transition-opacity", "duration-300", "opacity-0")
CLOSE_SELECTOR = "[data-flash-close]"
DISMISS_AFTER_ATTRIBUTE = "data-dismiss-after"


class _ListenerSet:
    """Tracks listeners so they can all be detached on unmount."""

    def __init__(self) -> None:
        self._bound: list[tuple[ElementPort, str, Listener]] = []

    def add(self, element: ElementPort, event_type: str, listener: Listener) -> None:
        element.add_event_listener(event_type, listener)
        self._bound.append((element, event_type, listener))

    def clear(self) -> None:
        for element, event_type, listener in self._bound:
            element.remove_event_listener(event_type, listener)
        self._bound.clear()

    def __len__(self) -> int:
        return len(self._bound)


class ProductPickerHook:
    """
    Translates the product picker's `change` event into an `input` event
    on the sibling hidden field so the enclosing form notices the change.
    """

    name = "OdysseyActivityPicker"

    def __init__(self, timers: TimerPort | None = None) -> None:
        self._el: ElementPort | None = None
        self._listeners = _ListenerSet()

    def on_mount(self, element: ElementPort) -> None:
        self._el = element
        picker = element.query_selector(PICKER_SELECTOR)
        if picker is None:
            logger.debug("No %s inside hooked element; nothing to bind", PICKER_SELECTOR)
            return

        self._listeners.add(picker, "click", self._swallow)
        self._listeners.add(picker, "change", self._on_change)

    def on_unmount(self, element: ElementPort) -> None:
        self._listeners.clear()
        self._el = None

    def _swallow(self, event: DomEvent) -> None:
        event.prevent_default()
        event.stop_propagation()

    def _on_change(self, event: DomEvent) -> None:
        event.prevent_default()
        event.stop_propagation()

        if self._el is None:
            return

        hidden = self._el.query_selector(HIDDEN_INPUT_SELECTOR)
        if hidden is None:
            logger.warning("Product picker changed but no hidden input to receive the selection")
            return

        selected = event.detail.get("selectedIds")
        if selected is None:
            selected = []
        if not isinstance(selected, (list, tuple)):
            logger.warning("Ignoring malformed selectedIds payload: %r", selected)
            return

        hidden.value = ",".join(str(x) for x in selected)
        hidden.dispatch_event(DomEvent("input", bubbles=True))


class FlashAutoDismissHook:
    """
    Auto-dismisses a flash notification.

    After the delay (or a close click) the fade classes are applied; the
    element is removed on `transitionend`, or by a fallback timer if the
    transition never reports. Dismissal and removal each run once.
    """

    name = "FlashAutoDismiss"

    def __init__(
        self,
        timers: TimerPort,
        dismiss_after_ms: int = DEFAULT_DISMISS_AFTER_MS,
        fade_duration_ms: int = FADE_DURATION_MS,
    ) -> None:
        self._timers = timers
        self._dismiss_after_ms = dismiss_after_ms
        self._fade_duration_ms = fade_duration_ms
        self._el: ElementPort | None = None
        self._listeners = _ListenerSet()
        self._dismiss_timer: int | None = None
        self._removal_timer: int | None = None
        self.dismissed = False
        self.removed = False

    def on_mount(self, element: ElementPort) -> None:
        self._el = element

        delay = self._dismiss_after_ms
        override = element.get_attribute(DISMISS_AFTER_ATTRIBUTE)
        if override is not None:
            try:
                delay = int(override)
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", DISMISS_AFTER_ATTRIBUTE, override)

        close = element.query_selector(CLOSE_SELECTOR)
        if close is not None:
            self._listeners.add(close, "click", self._on_close)

        self._dismiss_timer = self._timers.set_timeout(self.dismiss, delay)

    def on_unmount(self, element: ElementPort) -> None:
        self._clear_timers()
        self._listeners.clear()
        self._el = None

    @property
    def pending_timers(self) -> int:
        return sum(1 for t in (self._dismiss_timer, self._removal_timer) if t is not None)

    def dismiss(self) -> None:
        """Start the fade-out. Safe to call more than once."""
        if self.dismissed or self._el is None:
            return
        self.dismissed = True

        if self._dismiss_timer is not None:
            self._timers.clear_timeout(self._dismiss_timer)
            self._dismiss_timer = None

        self._el.add_class(*FADE_CLASSES)
        self._listeners.add(self._el, "transitionend", self._on_transition_end)
        self._removal_timer = self._timers.set_timeout(self._remove, self._fade_duration_ms)

    def _on_close(self, event: DomEvent) -> None:
        event.prevent_default()
        self.dismiss()

    def _on_transition_end(self, event: DomEvent) -> None:
        self._remove()

    def _remove(self) -> None:
        if self.removed or self._el is None:
            return
        self.removed = True

        el = self._el
        self._clear_timers()
        self._listeners.clear()
        el.remove()

    def _clear_timers(self) -> None:
        for handle in (self._dismiss_timer, self._removal_timer):
            if handle is not None:
                self._timers.clear_timeout(handle)
        self._dismiss_timer = None
        self._removal_timer = None


DEFAULT_HOOKS: tuple[HookRegistration, ...] = (
    HookRegistration(ProductPickerHook.name, ProductPickerHook),
    HookRegistration(FlashAutoDismissHook.name, FlashAutoDismissHook),
)
