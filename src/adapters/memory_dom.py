"""
In-memory DOM and manual timer adapters.

Implements ElementPort and TimerPort for running hook lifecycles outside a
browser: local development harnesses and tests.

Key behaviors:
- Selectors: `tag`, `[attr]`, `[attr="value"]`, `tag[attr="value"]`
- Events bubble to ancestors unless propagation is stopped
- Removing an element notifies the owning document's removal observers
  before it is detached
- Timers fire only when the clock is advanced explicitly
"""

from __future__ import annotations

import heapq
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from src.components.hooks.models import DomEvent

Listener = Callable[[DomEvent], None]

_SELECTOR_RE = re.compile(
    r"""^(?P<tag>[a-zA-Z][\w-]*)?(?:\[(?P<attr>[\w-]+)(?:=["']?(?P<value>[^"'\]]*)["']?)?\])?$"""
)


@dataclass(frozen=True)
class _Selector:
    tag: str | None
    attr: str | None
    value: str | None

    @classmethod
    def parse(cls, selector: str) -> _Selector:
        match = _SELECTOR_RE.match(selector.strip())
        if not match or not (match.group("tag") or match.group("attr")):
            raise ValueError(f"Unsupported selector: {selector}")
        return cls(match.group("tag"), match.group("attr"), match.group("value"))

    def matches(self, element: MemoryElement) -> bool:
        if self.tag and element.tag != self.tag.lower():
            return False
        if self.attr:
            actual = element.get_attribute(self.attr)
            if actual is None:
                return False
            if self.value is not None and actual != self.value:
                return False
        return True


class MemoryElement:
    """A DOM element held entirely in memory."""

    def __init__(
        self,
        tag: str,
        attributes: dict[str, str] | None = None,
        children: list[MemoryElement] | None = None,
    ) -> None:
        self.tag = tag.lower()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.classes: list[str] = self.attributes.pop("class", "").split()
        self.children: list[MemoryElement] = []
        self.parent: MemoryElement | None = None
        self._listeners: dict[str, list[Listener]] = {}
        self.dispatched: list[DomEvent] = []
        self._removing = False
        for child in children or []:
            self.append(child)

    # --- Tree ---

    def append(self, child: MemoryElement) -> MemoryElement:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def iter_descendants(self) -> Iterator[MemoryElement]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def root(self) -> MemoryElement:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def is_connected(self) -> bool:
        return isinstance(self.root(), MemoryDocument)

    def remove(self) -> None:
        if self.parent is None or self._removing:
            return
        self._removing = True
        try:
            # Observers run while the element is still attached
            root = self.root()
            if isinstance(root, MemoryDocument):
                root.notify_removed(self)
            if self.parent is not None:
                self.parent.children.remove(self)
                self.parent = None
        finally:
            self._removing = False

    # --- Attributes ---

    @property
    def value(self) -> str:
        return self.attributes.get("value", "")

    @value.setter
    def value(self, new_value: str) -> None:
        self.attributes["value"] = new_value

    def get_attribute(self, name: str) -> str | None:
        if name == "class":
            return " ".join(self.classes) if self.classes else None
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        if name == "class":
            self.classes = value.split()
        else:
            self.attributes[name] = value

    def add_class(self, *names: str) -> None:
        for name in names:
            if name not in self.classes:
                self.classes.append(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    # --- Queries ---

    def query_selector(self, selector: str) -> MemoryElement | None:
        parsed = _Selector.parse(selector)
        for element in self.iter_descendants():
            if parsed.matches(element):
                return element
        return None

    def query_selector_all(self, selector: str) -> list[MemoryElement]:
        parsed = _Selector.parse(selector)
        return [el for el in self.iter_descendants() if parsed.matches(el)]

    # --- Events ---

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(v) for v in self._listeners.values())

    def dispatch_event(self, event: DomEvent) -> bool:
        if event.target is None:
            event.target = self
        node: MemoryElement | None = self
        while node is not None:
            node.dispatched.append(event)
            for listener in list(node._listeners.get(event.type, [])):
                listener(event)
            if not event.bubbles or event.propagation_stopped:
                break
            node = node.parent
        return not event.default_prevented

    def __repr__(self) -> str:
        return f"<{self.tag} {self.attributes!r}>"


class MemoryDocument(MemoryElement):
    """Document root; reports element removals to observers."""

    def __init__(self, children: list[MemoryElement] | None = None) -> None:
        super().__init__("#document", children=children)
        self._removal_observers: list[Callable[[MemoryElement], None]] = []

    def on_removed(self, observer: Callable[[MemoryElement], None]) -> None:
        self._removal_observers.append(observer)

    def notify_removed(self, element: MemoryElement) -> None:
        for observer in list(self._removal_observers):
            observer(element)


@dataclass(order=True)
class _Scheduled:
    due_ms: int
    seq: int
    handle: int = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class ManualTimer:
    """TimerPort driven by an explicit virtual clock."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[_Scheduled] = []
        self._cancelled: set[int] = set()
        self._next_handle = 1
        self._seq = 0

    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._seq += 1
        heapq.heappush(self._queue, _Scheduled(self.now_ms + max(delay_ms, 0), self._seq, handle, callback))
        return handle

    def clear_timeout(self, handle: int) -> None:
        if any(item.handle == handle for item in self._queue):
            self._cancelled.add(handle)

    @property
    def pending(self) -> int:
        return sum(1 for item in self._queue if item.handle not in self._cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing due callbacks in order. Returns count fired."""
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0].due_ms <= target:
            item = heapq.heappop(self._queue)
            self.now_ms = item.due_ms
            if item.handle in self._cancelled:
                self._cancelled.discard(item.handle)
                continue
            item.callback()
            fired += 1
        self.now_ms = target
        return fired
