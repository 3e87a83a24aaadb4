"""
Hooks component unit tests.

Tests for the hook runtime lifecycle, the product picker bridge, the flash
auto-dismiss timing and socket options.
"""

from __future__ import annotations

import logging

import pytest

from src.adapters.memory_dom import ManualTimer, MemoryDocument, MemoryElement
from src.components.hooks import (
    FADE_DURATION_MS,
    DomEvent,
    FlashAutoDismissHook,
    HookRegistration,
    HookRegistry,
    HookRuntime,
    ProductPickerHook,
    build_socket_options,
    default_registry,
    read_csrf_token,
)

# --- Fixtures ---


@pytest.fixture
def timers() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def document() -> MemoryDocument:
    return MemoryDocument()


@pytest.fixture
def runtime(document: MemoryDocument, timers: ManualTimer) -> HookRuntime:
    rt = HookRuntime(default_registry(), timers)
    document.on_removed(rt.handle_removed)
    return rt


def make_picker(with_hidden: bool = True) -> MemoryElement:
    children = [MemoryElement("odyssey-product-picker")]
    if with_hidden:
        children.append(MemoryElement("input", {"type": "hidden", "name": "activity_ids"}))
    return MemoryElement("div", {"phx-hook": "OdysseyActivityPicker", "id": "picker"}, children)


def make_flash(**attrs: str) -> MemoryElement:
    close = MemoryElement("button", {"data-flash-close": ""})
    return MemoryElement("div", {"phx-hook": "FlashAutoDismiss", "role": "alert", **attrs}, [close])


# --- Runtime ---


class CountingHook:
    """Records lifecycle calls."""

    instances: list[CountingHook] = []

    def __init__(self, timers: object) -> None:
        self.calls: list[str] = []
        CountingHook.instances.append(self)

    def on_mount(self, element: object) -> None:
        self.calls.append("mount")

    def on_update(self, element: object) -> None:
        self.calls.append("update")

    def on_unmount(self, element: object) -> None:
        self.calls.append("unmount")


class MountOnlyHook:
    def __init__(self, timers: object) -> None:
        self.mounted = False

    def on_mount(self, element: object) -> None:
        self.mounted = True


class TestHookRuntime:
    """Mount / update / unmount exactly once per element."""

    @pytest.fixture(autouse=True)
    def _reset(self) -> None:
        CountingHook.instances = []

    @pytest.fixture
    def counting_runtime(self, document: MemoryDocument, timers: ManualTimer) -> HookRuntime:
        registry = HookRegistry([HookRegistration("Counting", CountingHook), HookRegistration("MountOnly", MountOnlyHook)])
        rt = HookRuntime(registry, timers)
        document.on_removed(rt.handle_removed)
        return rt

    def test_mount_once_per_element(self, document: MemoryDocument, counting_runtime: HookRuntime) -> None:
        el = document.append(MemoryElement("div", {"phx-hook": "Counting"}))

        first = counting_runtime.mount(el)
        second = counting_runtime.mount(el)

        assert first is second
        assert len(CountingHook.instances) == 1
        assert CountingHook.instances[0].calls == ["mount"]

    def test_one_instance_per_element(self, document: MemoryDocument, counting_runtime: HookRuntime) -> None:
        a = document.append(MemoryElement("div", {"phx-hook": "Counting"}))
        b = document.append(MemoryElement("div", {"phx-hook": "Counting"}))

        assert counting_runtime.mount(a) is not counting_runtime.mount(b)
        assert counting_runtime.mounted_count == 2

    def test_update_and_unmount(self, document: MemoryDocument, counting_runtime: HookRuntime) -> None:
        el = document.append(MemoryElement("div", {"phx-hook": "Counting"}))
        counting_runtime.mount(el)

        counting_runtime.update(el)
        el.remove()
        counting_runtime.unmount(el)

        assert CountingHook.instances[0].calls == ["mount", "update", "unmount"]
        assert counting_runtime.mounted_count == 0

    def test_parent_removal_unmounts_descendants(
        self, document: MemoryDocument, counting_runtime: HookRuntime
    ) -> None:
        child = MemoryElement("div", {"phx-hook": "Counting"})
        wrapper = document.append(MemoryElement("section", children=[child]))
        counting_runtime.mount_tree(document)

        wrapper.remove()

        assert CountingHook.instances[0].calls == ["mount", "unmount"]

    def test_unmount_runs_before_detach(self, document: MemoryDocument, timers: ManualTimer) -> None:
        connected_at_unmount: list[bool] = []

        class ConnectedHook:
            def __init__(self, timers: object) -> None:
                pass

            def on_mount(self, element: MemoryElement) -> None:
                pass

            def on_unmount(self, element: MemoryElement) -> None:
                connected_at_unmount.append(element.is_connected)

        rt = HookRuntime(HookRegistry([HookRegistration("Connected", ConnectedHook)]), timers)
        document.on_removed(rt.handle_removed)
        child = MemoryElement("div", {"phx-hook": "Connected"})
        wrapper = document.append(MemoryElement("section", children=[child]))
        rt.mount_tree(document)

        wrapper.remove()

        assert connected_at_unmount == [True]
        assert not child.is_connected

    def test_optional_callbacks_may_be_absent(
        self, document: MemoryDocument, counting_runtime: HookRuntime
    ) -> None:
        el = document.append(MemoryElement("div", {"phx-hook": "MountOnly"}))
        hook = counting_runtime.mount(el)

        counting_runtime.update(el)
        el.remove()

        assert isinstance(hook, MountOnlyHook)
        assert hook.mounted
        assert counting_runtime.mounted_count == 0

    def test_unknown_hook_is_logged(
        self, document: MemoryDocument, counting_runtime: HookRuntime, caplog: pytest.LogCaptureFixture
    ) -> None:
        el = document.append(MemoryElement("div", {"phx-hook": "Nope"}))

        assert counting_runtime.mount(el) is None
        assert "Unknown hook 'Nope'" in caplog.text

    def test_element_without_hook_attribute(self, counting_runtime: HookRuntime) -> None:
        assert counting_runtime.mount(MemoryElement("div")) is None

    def test_duplicate_registration_rejected(self) -> None:
        registry = HookRegistry([HookRegistration("Counting", CountingHook)])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(HookRegistration("Counting", CountingHook))


# --- Product picker ---


class TestProductPickerHook:
    """Selection change -> hidden input value + input event."""

    def test_change_updates_hidden_input(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        hidden = root.query_selector('input[type="hidden"]')
        assert picker is not None and hidden is not None

        allowed = picker.dispatch_event(DomEvent("change", detail={"selectedIds": ["a", "b"]}, bubbles=True))

        assert hidden.value == "a,b"
        assert not allowed
        input_events = [e for e in hidden.dispatched if e.type == "input"]
        assert len(input_events) == 1
        assert input_events[0].bubbles

    def test_change_does_not_propagate(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        assert picker is not None

        picker.dispatch_event(DomEvent("change", detail={"selectedIds": ["x"]}, bubbles=True))

        # Only the synthesized input event bubbles up to the hooked element
        assert [e.type for e in root.dispatched] == ["input"]

    def test_string_selection_is_rejected(
        self, document: MemoryDocument, runtime: HookRuntime, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        hidden = root.query_selector('input[type="hidden"]')
        assert picker is not None and hidden is not None
        hidden.value = "prev"

        with caplog.at_level(logging.WARNING):
            picker.dispatch_event(DomEvent("change", detail={"selectedIds": "abc"}))

        assert hidden.value == "prev"
        assert hidden.dispatched == []
        assert "malformed selectedIds" in caplog.text

    def test_missing_selection_clears_value(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        hidden = root.query_selector('input[type="hidden"]')
        assert picker is not None and hidden is not None
        hidden.value = "prev"

        picker.dispatch_event(DomEvent("change"))

        assert hidden.value == ""

    def test_empty_selection(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        hidden = root.query_selector('input[type="hidden"]')
        assert picker is not None and hidden is not None

        picker.dispatch_event(DomEvent("change", detail={"selectedIds": []}))

        assert hidden.value == ""

    def test_click_is_swallowed(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        assert picker is not None

        event = DomEvent("click", bubbles=True)
        picker.dispatch_event(event)

        assert event.default_prevented
        assert event.propagation_stopped
        assert root.dispatched == []

    def test_missing_hidden_input_logs(
        self, document: MemoryDocument, runtime: HookRuntime, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = document.append(make_picker(with_hidden=False))
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        assert picker is not None

        with caplog.at_level(logging.WARNING):
            picker.dispatch_event(DomEvent("change", detail={"selectedIds": ["a"]}))

        assert "no hidden input" in caplog.text

    def test_missing_picker_is_noop(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(MemoryElement("div", {"phx-hook": "OdysseyActivityPicker"}))
        hook = runtime.mount(root)
        assert isinstance(hook, ProductPickerHook)

    def test_unmount_detaches_listeners(self, document: MemoryDocument, runtime: HookRuntime) -> None:
        root = document.append(make_picker())
        runtime.mount(root)
        picker = root.query_selector("odyssey-product-picker")
        assert picker is not None
        assert picker.listener_count() == 2

        root.remove()

        assert picker.listener_count() == 0


# --- Flash auto-dismiss ---


class TestFlashAutoDismissHook:
    """Fade then remove after a delay or on close."""

    def test_auto_removes_after_delay(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        flash = document.append(make_flash())
        runtime.mount(flash)

        timers.advance(4999)
        assert flash.is_connected
        assert not flash.has_class("opacity-0")

        timers.advance(1)
        assert flash.has_class("opacity-0")
        assert flash.is_connected

        timers.advance(FADE_DURATION_MS)
        assert not flash.is_connected
        assert runtime.mounted_count == 0
        assert timers.pending == 0

    def test_transition_end_removes_immediately(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        flash = document.append(make_flash())
        runtime.mount(flash)

        timers.advance(5000)
        flash.dispatch_event(DomEvent("transitionend"))

        assert not flash.is_connected
        assert timers.pending == 0

    def test_close_action_dismisses_once(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        removed: list[MemoryElement] = []
        document.on_removed(removed.append)
        flash = document.append(make_flash())
        hook = runtime.mount(flash)
        assert isinstance(hook, FlashAutoDismissHook)
        close = flash.query_selector("[data-flash-close]")
        assert close is not None

        close.dispatch_event(DomEvent("click", bubbles=True))
        hook.dismiss()
        flash.dispatch_event(DomEvent("transitionend"))
        flash.dispatch_event(DomEvent("transitionend"))
        timers.advance(10_000)

        assert hook.dismissed and hook.removed
        assert removed == [flash]

    def test_delay_attribute_override(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        flash = document.append(make_flash(**{"data-dismiss-after": "1000"}))
        runtime.mount(flash)

        timers.advance(1000)

        assert flash.has_class("opacity-0")

    def test_invalid_delay_attribute_falls_back(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        flash = document.append(make_flash(**{"data-dismiss-after": "soon"}))
        runtime.mount(flash)

        timers.advance(4999)
        assert not flash.has_class("opacity-0")
        timers.advance(1)
        assert flash.has_class("opacity-0")

    def test_removed_before_delay_clears_timers(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        flash = MemoryElement("div", {"phx-hook": "FlashAutoDismiss"})
        wrapper = document.append(MemoryElement("main", children=[flash]))
        hook = runtime.mount(flash)
        assert isinstance(hook, FlashAutoDismissHook)
        assert timers.pending == 1

        wrapper.remove()
        fired = timers.advance(10_000)

        assert timers.pending == 0
        assert fired == 0
        assert not hook.dismissed

    def test_unmount_during_fade_clears_fallback(
        self, document: MemoryDocument, runtime: HookRuntime, timers: ManualTimer
    ) -> None:
        flash = document.append(make_flash())
        hook = runtime.mount(flash)
        assert isinstance(hook, FlashAutoDismissHook)

        timers.advance(5000)
        assert hook.pending_timers == 1
        runtime.unmount(flash)

        assert hook.pending_timers == 0
        assert timers.pending == 0


# --- Socket options ---


PAGE = """
<html>
  <head>
    <meta charset="utf-8">
    <meta name="csrf-token" content="tok-123">
  </head>
  <body></body>
</html>
"""


class TestSocketOptions:
    def test_reads_csrf_token(self) -> None:
        assert read_csrf_token(PAGE) == "tok-123"

    def test_missing_token(self) -> None:
        assert read_csrf_token("<html><head></head></html>") is None

    def test_build_options(self) -> None:
        options = build_socket_options(PAGE, default_registry())

        assert options.endpoint == "/live"
        assert options.params == {"_csrf_token": "tok-123"}
        assert options.hooks == ("OdysseyActivityPicker", "FlashAutoDismiss")

    def test_build_options_without_token(self) -> None:
        options = build_socket_options("<html></html>", default_registry())
        assert options.params == {}
