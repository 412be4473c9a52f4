"""Large-display capability and its software fallback."""

from __future__ import annotations

from typing import List

from spiral_compare.view import (
    FallbackLargeDisplay,
    LargeDisplay,
    MaximizedLayoutDisplay,
)


class BrokenDisplay(LargeDisplay):
    def _enter(self) -> None:
        raise RuntimeError("fullscreen not available")

    def _leave(self) -> None:  # pragma: no cover - never entered
        raise AssertionError("should not leave a mode that was never entered")


class RecordingDisplay(LargeDisplay):
    def __init__(self) -> None:
        super().__init__()
        self.calls: List[str] = []

    def _enter(self) -> None:
        self.calls.append("enter")

    def _leave(self) -> None:
        self.calls.append("leave")

    def external_exit(self) -> None:
        self._set_active(False)


def test_maximized_layout_calls_hooks() -> None:
    calls: List[str] = []
    display = MaximizedLayoutDisplay(
        on_enter=lambda: calls.append("in"), on_leave=lambda: calls.append("out")
    )
    seen: List[bool] = []
    display.subscribe(seen.append)

    assert display.toggle() is True
    display.request_large_display()  # already active: no second call
    assert display.toggle() is False
    display.exit_large_display()

    assert calls == ["in", "out"]
    assert seen == [True, False]


def test_fallback_prefers_primary() -> None:
    primary = RecordingDisplay()
    fallback = RecordingDisplay()
    display = FallbackLargeDisplay(primary, fallback)

    display.request_large_display()
    assert display.active and primary.active
    assert display.engaged is primary
    display.exit_large_display()

    assert primary.calls == ["enter", "leave"]
    assert fallback.calls == []
    assert not display.active


def test_fallback_recovers_from_failure(caplog) -> None:
    fallback = RecordingDisplay()
    display = FallbackLargeDisplay(BrokenDisplay(), fallback)
    seen: List[bool] = []
    display.subscribe(seen.append)

    display.request_large_display()

    assert display.active
    assert display.engaged is fallback
    assert fallback.calls == ["enter"]
    assert "fullscreen not available" in caplog.text

    display.exit_large_display()
    assert fallback.calls == ["enter", "leave"]
    assert seen == [True, False]


def test_external_exit_propagates() -> None:
    primary = RecordingDisplay()
    display = FallbackLargeDisplay(primary, RecordingDisplay())
    seen: List[bool] = []
    display.subscribe(seen.append)

    display.request_large_display()
    primary.external_exit()

    assert not display.active
    assert display.engaged is None
    assert seen == [True, False]
