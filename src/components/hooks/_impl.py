"""
Hook registry and lifecycle runtime.

The runtime stands in for the view-update protocol: it mounts a fresh hook
instance for every element carrying `phx-hook`, and unmounts it exactly
once whichever way the element leaves the DOM.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import HOOK_ATTRIBUTE, HookRegistration
from .ports import ElementPort, LifecycleHook, TimerPort

logger = logging.getLogger(__name__)


class HookRegistry:
    """Name -> hook factory mapping passed to the client socket."""

    def __init__(self, registrations: Iterable[HookRegistration] = ()) -> None:
        self._registrations: dict[str, HookRegistration] = {}
        for registration in registrations:
            self.register(registration)

    def register(self, registration: HookRegistration) -> None:
        if registration.name in self._registrations:
            raise ValueError(f"Hook already registered: {registration.name}")
        self._registrations[registration.name] = registration

    def get(self, name: str) -> HookRegistration | None:
        return self._registrations.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._registrations)

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)


class HookRuntime:
    """
    Drives hook lifecycles for a tree of elements.

    Instances are keyed by element identity; one element never has two
    live instances.
    """

    def __init__(self, registry: HookRegistry, timers: TimerPort) -> None:
        self._registry = registry
        self._timers = timers
        self._mounted: dict[int, tuple[ElementPort, LifecycleHook]] = {}

    def mount(self, element: ElementPort) -> LifecycleHook | None:
        """Mount the hook named by the element's `phx-hook` attribute."""
        key = id(element)
        if key in self._mounted:
            return self._mounted[key][1]

        name = element.get_attribute(HOOK_ATTRIBUTE)
        if not name:
            return None

        registration = self._registry.get(name)
        if registration is None:
            logger.warning("Unknown hook %r on <%s>", name, element.tag)
            return None

        hook = registration.factory(self._timers)
        self._mounted[key] = (element, hook)
        hook.on_mount(element)
        return hook

    def mount_tree(self, root: ElementPort) -> list[LifecycleHook]:
        """Mount the root (if hooked) and every hooked descendant."""
        hooks = []
        for element in [root, *root.query_selector_all(f"[{HOOK_ATTRIBUTE}]")]:
            hook = self.mount(element)
            if hook is not None:
                hooks.append(hook)
        return hooks

    def update(self, element: ElementPort) -> None:
        mounted = self._mounted.get(id(element))
        if mounted is None:
            return
        on_update = getattr(mounted[1], "on_update", None)
        if on_update is not None:
            on_update(element)

    def unmount(self, element: ElementPort) -> None:
        mounted = self._mounted.pop(id(element), None)
        if mounted is None:
            return
        on_unmount = getattr(mounted[1], "on_unmount", None)
        if on_unmount is not None:
            on_unmount(element)

    def handle_removed(self, element: ElementPort) -> None:
        """Unmount a removed element and every hooked element below it, before detaching."""
        for descendant in element.query_selector_all(f"[{HOOK_ATTRIBUTE}]"):
            self.unmount(descendant)
        self.unmount(element)

    def hook_for(self, element: ElementPort) -> LifecycleHook | None:
        mounted = self._mounted.get(id(element))
        return mounted[1] if mounted else None

    @property
    def mounted_count(self) -> int:
        return len(self._mounted)
