"""
Hooks component models.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .ports import LifecycleHook, TimerPort

HOOK_ATTRIBUTE = "phx-hook"


@dataclass
class DomEvent:
    """A DOM event as seen by hook listeners."""

    type: str
    detail: dict[str, Any] = field(default_factory=dict)
    bubbles: bool = False
    target: Any = None
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


HookFactory = Callable[["TimerPort"], "LifecycleHook"]


@dataclass(frozen=True)
class HookRegistration:
    """Hook name as used in the `phx-hook` attribute, and its factory."""

    name: str
    factory: HookFactory


@dataclass(frozen=True)
class SocketOptions:
    """Client socket init payload."""

    endpoint: str
    params: dict[str, str]
    hooks: tuple[str, ...]
