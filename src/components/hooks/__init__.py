"""
Hooks component - Client lifecycle hooks for server-rendered markup.

Each hook is bound 1:1 to a mounted element and releases its listeners
and timers on unmount.
"""

from ._impl import HookRegistry, HookRuntime
from .component import (
    DEFAULT_DISMISS_AFTER_MS,
    DEFAULT_HOOKS,
    FADE_CLASSES,
    FADE_DURATION_MS,
    FlashAutoDismissHook,
    ProductPickerHook,
)
from .models import HOOK_ATTRIBUTE, DomEvent, HookRegistration, SocketOptions
from .ports import ElementPort, LifecycleHook, TimerPort
from .socket import LIVE_ENDPOINT, build_socket_options, read_csrf_token


def default_registry() -> HookRegistry:
    """Registry holding the built-in hooks."""
    return HookRegistry(DEFAULT_HOOKS)


__all__ = [
    # Entry points
    "default_registry",
    "HookRegistry",
    "HookRuntime",
    "build_socket_options",
    "read_csrf_token",
    "LIVE_ENDPOINT",
    # Hooks
    "DEFAULT_HOOKS",
    "FlashAutoDismissHook",
    "ProductPickerHook",
    "DEFAULT_DISMISS_AFTER_MS",
    "FADE_CLASSES",
    "FADE_DURATION_MS",
    # Models
    "HOOK_ATTRIBUTE",
    "DomEvent",
    "HookRegistration",
    "SocketOptions",
    # Ports
    "ElementPort",
    "LifecycleHook",
    "TimerPort",
]
